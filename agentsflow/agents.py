from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from agentsflow.core.errors import UnknownAgentError
from agentsflow.core.types import Provider


@dataclass(frozen=True, slots=True)
class AgentPreset:
    id: str
    name: str
    description: str
    provider: Provider
    model: str
    system_prompt: str


AI_AGENTS: tuple[AgentPreset, ...] = (
    AgentPreset(
        id="fast-chat",
        name="Fast Chat",
        description="Quick answers from the small local model.",
        provider=Provider.LOCAL,
        model="ministral-3:3b",
        system_prompt="You are a helpful assistant. Keep answers short and direct.",
    ),
    AgentPreset(
        id="lead-qualifier",
        name="Lead Qualifier",
        description="Scores inbound leads and suggests the next sales step.",
        provider=Provider.LOCAL,
        model="mistral",
        system_prompt=(
            "You qualify marketing leads. Given what is known about a prospect, assess "
            "budget, authority, need and timeline, and recommend the next step."
        ),
    ),
    AgentPreset(
        id="sales-assistant",
        name="Sales Assistant",
        description="Talks to prospects about the service packages.",
        provider=Provider.LOCAL,
        model="llama3.1:8b",
        system_prompt=(
            "You are a friendly sales assistant for a digital marketing agency. Explain the "
            "Starter, Growth and Enterprise packages and help the prospect book a call."
        ),
    ),
    AgentPreset(
        id="web-dev-agent",
        name="Web Developer",
        description="Answers website and front-end questions.",
        provider=Provider.CLOUD,
        model="gemini-2.0-flash",
        system_prompt=(
            "You are a senior web developer. Give practical, production-ready advice on "
            "building and optimizing websites."
        ),
    ),
    AgentPreset(
        id="seo-strategist",
        name="SEO Strategist",
        description="Plans search optimization work for client sites.",
        provider=Provider.CLOUD,
        model="gemini-2.0-flash",
        system_prompt=(
            "You are an SEO strategist. Produce prioritized, measurable recommendations "
            "for organic search growth."
        ),
    ),
    AgentPreset(
        id="content-writer",
        name="Content Writer",
        description="Drafts marketing copy, emails and social posts.",
        provider=Provider.CLOUD,
        model="gemini-2.0-flash",
        system_prompt=(
            "You are a marketing copywriter. Write clear, persuasive copy in the brand's "
            "voice and keep calls to action explicit."
        ),
    ),
)

AGENTS_BY_ID: Mapping[str, AgentPreset] = MappingProxyType(
    {agent.id: agent for agent in AI_AGENTS}
)


def get_agent(agent_id: str) -> AgentPreset:
    try:
        return AGENTS_BY_ID[agent_id]
    except KeyError:
        raise UnknownAgentError(agent_id) from None
