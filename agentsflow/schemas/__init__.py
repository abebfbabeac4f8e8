from agentsflow.schemas.ai import (
    AgentPresetOut, ChatMessageIn, GenerateRequestBody,
    GenerateResponseBody, OllamaActionBody,
)
from agentsflow.schemas.appointment import AppointmentCreate, AppointmentResponse
from agentsflow.schemas.conversation import (
    ConversationCreate, ConversationResponse, MessageCreate, MessageResponse,
)
from agentsflow.schemas.lead import DeleteResult, LeadCreate, LeadResponse, LeadUpdate
from agentsflow.schemas.service import ServiceCreate, ServiceResponse

__all__ = [
    "AgentPresetOut", "ChatMessageIn", "GenerateRequestBody",
    "GenerateResponseBody", "OllamaActionBody",
    "AppointmentCreate", "AppointmentResponse",
    "ConversationCreate", "ConversationResponse", "MessageCreate", "MessageResponse",
    "DeleteResult", "LeadCreate", "LeadResponse", "LeadUpdate",
    "ServiceCreate", "ServiceResponse",
]
