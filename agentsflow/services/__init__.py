from agentsflow.services.appointments import create_appointment, list_appointments
from agentsflow.services.catalog import (
    DEFAULT_SERVICES, create_service, list_active_services, seed_services,
)
from agentsflow.services.conversations import (
    create_conversation, create_message, get_conversation_or_404,
    list_conversations, list_messages,
)
from agentsflow.services.leads import (
    create_lead, delete_lead, get_lead, get_lead_or_404, list_leads, update_lead,
)

__all__ = [
    "create_appointment", "list_appointments",
    "DEFAULT_SERVICES", "create_service", "list_active_services", "seed_services",
    "create_conversation", "create_message", "get_conversation_or_404",
    "list_conversations", "list_messages",
    "create_lead", "delete_lead", "get_lead", "get_lead_or_404", "list_leads", "update_lead",
]
