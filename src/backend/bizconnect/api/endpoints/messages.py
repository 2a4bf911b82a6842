"""
Direct messages between users and the public contact form.
"""

from typing import Literal

from fastapi import APIRouter, status
from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.orm import aliased
from sqlalchemy.orm.util import AliasedClass

from bizconnect.api.deps import DB
from bizconnect.core.config import get_settings
from bizconnect.core.exceptions import EntityNotFoundException
from bizconnect.core.logging import get_logger
from bizconnect.models import Message, Opportunity, User
from bizconnect.schemas.common import SuccessResponse
from bizconnect.schemas.message import (
    ContactForm,
    MessageCreate,
    MessageCreated,
    MessageResponse,
)

logger = get_logger(__name__)
router = APIRouter()

Sender = aliased(User, name="sender")
Receiver = aliased(User, name="receiver")


def _display_name(user: AliasedClass[User]) -> ColumnElement[str]:
    return func.coalesce(user.business_name, user.organization_name, user.email)


@router.post("/contact", response_model=SuccessResponse)
async def submit_contact_form(data: ContactForm) -> SuccessResponse:
    """Accept a contact form submission. Nothing is mailed; it is logged."""
    settings = get_settings()
    logger.info(
        "Contact form received",
        to=settings.contact_inbox,
        sender_name=data.name,
        sender_email=data.email,
        subject=data.subject or f"Issue Report: {data.issue_type}",
        page_url=data.page_url,
        body=data.message,
    )
    return SuccessResponse(message="Contact form submitted successfully")


@router.post("", response_model=MessageCreated, status_code=status.HTTP_201_CREATED)
async def send_message(db: DB, data: MessageCreate) -> MessageCreated:
    for user_id in (data.sender_id, data.receiver_id):
        if await db.get(User, user_id) is None:
            raise EntityNotFoundException("User", user_id)

    message = Message(
        sender_id=data.sender_id,
        receiver_id=data.receiver_id,
        opportunity_id=data.opportunity_id or None,
        subject=data.subject or None,
        body=data.body,
    )
    db.add(message)
    await db.flush()

    logger.info(
        "Message sent",
        message_id=message.id,
        sender_id=data.sender_id,
        receiver_id=data.receiver_id,
    )
    return MessageCreated(id=message.id, message="Message sent successfully")


@router.get("/user/{user_id}", response_model=list[MessageResponse])
async def list_user_messages(
    db: DB,
    user_id: int,
    type: Literal["inbox", "sent"] = "inbox",
) -> list[MessageResponse]:
    """Inbox (default) or sent messages for a user, newest first."""
    query = (
        select(
            Message,
            _display_name(Sender).label("sender_name"),
            _display_name(Receiver).label("receiver_name"),
            Opportunity.title.label("opportunity_title"),
        )
        .join(Sender, Message.sender_id == Sender.id)
        .join(Receiver, Message.receiver_id == Receiver.id)
        .outerjoin(Opportunity, Message.opportunity_id == Opportunity.id)
        .order_by(Message.created_at.desc(), Message.id.desc())
    )
    if type == "sent":
        query = query.where(Message.sender_id == user_id)
    else:
        query = query.where(Message.receiver_id == user_id)

    result = await db.execute(query)
    return [
        MessageResponse(
            **MessageResponse.model_validate(row.Message).model_dump(
                exclude={"sender_name", "receiver_name", "opportunity_title"}
            ),
            sender_name=row.sender_name,
            receiver_name=row.receiver_name,
            opportunity_title=row.opportunity_title,
        )
        for row in result.all()
    ]


@router.put("/{message_id}/read", response_model=SuccessResponse)
async def mark_message_read(db: DB, message_id: int) -> SuccessResponse:
    message = await db.get(Message, message_id)
    if message is None:
        raise EntityNotFoundException("Message", message_id)

    message.is_read = True
    await db.flush()
    return SuccessResponse(message="Message marked as read")


@router.delete("/{message_id}", response_model=SuccessResponse)
async def delete_message(db: DB, message_id: int) -> SuccessResponse:
    result = await db.execute(delete(Message).where(Message.id == message_id))
    if result.rowcount == 0:
        raise EntityNotFoundException("Message", message_id)

    logger.info("Message deleted", message_id=message_id)
    return SuccessResponse(message="Message deleted")
