"""Conversation router: chat with the travel assistant about a saved preference."""

import logging
import uuid

from fastapi import APIRouter, Depends

from triponic.dependencies import get_chat_responder, get_conversation_store, get_preference_store
from triponic.schemas.conversation import Conversation, ConversationCreate, Message, MessageCreate, Role
from triponic.services.chat_responder import ChatResponder
from triponic.services.errors import InvalidRequest
from triponic.services.stores import ConversationStore, PreferenceStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Conversation, response_model_by_alias=True, status_code=201)
async def create_conversation(
    req: ConversationCreate,
    preferences: PreferenceStore = Depends(get_preference_store),
    conversations: ConversationStore = Depends(get_conversation_store),
):
    preference = await preferences.get(req.preference_id)
    return await conversations.create(preference.id)


@router.get("/{conversation_id}", response_model=Conversation, response_model_by_alias=True)
async def get_conversation(
    conversation_id: uuid.UUID,
    conversations: ConversationStore = Depends(get_conversation_store),
):
    return await conversations.get(conversation_id)


@router.post("/{conversation_id}/messages", response_model=Message)
async def send_message(
    conversation_id: uuid.UUID,
    req: MessageCreate,
    responder: ChatResponder = Depends(get_chat_responder),
    preferences: PreferenceStore = Depends(get_preference_store),
    conversations: ConversationStore = Depends(get_conversation_store),
):
    """Append the user's message and return the assistant's reply."""
    if not req.content.strip():
        raise InvalidRequest("Message content is required")

    conversation = await conversations.get(conversation_id)
    preference = await preferences.get(conversation.preference_id)

    conversation = await conversations.append(
        conversation.id, Message(role=Role.USER, content=req.content)
    )
    reply = await responder.respond(preference, conversation)

    message = Message(role=Role.ASSISTANT, content=reply)
    await conversations.append(conversation.id, message)
    return message
