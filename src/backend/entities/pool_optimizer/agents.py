"""
Pool capacity advisor agent.

One ChatAgent drafts the KQL queries and, on the same thread, produces the
recommendation with the Kusto analysis functions available as tools.
"""

import logging
from typing import Any

from agent_framework import ChatAgent
from agent_framework.azure import AzureOpenAIChatClient
from azure.identity import DefaultAzureCredential
from config.settings import Settings

from .prompts import AGENT_INSTRUCTIONS

logger = logging.getLogger(__name__)


def create_chat_client(settings: Settings) -> AzureOpenAIChatClient:
    """Create the Azure OpenAI chat client from settings.

    Uses the API key when one is configured, otherwise Entra ID through
    ``DefaultAzureCredential``.

    Args:
        settings: Application settings.

    Returns:
        Configured chat client.

    Raises:
        ValueError: If no Azure OpenAI endpoint is configured.
    """
    if not settings.azure_openai_endpoint:
        raise ValueError(
            "AZURE_OPENAI_ENDPOINT environment variable is required. "
            "Set it to your Azure OpenAI resource endpoint."
        )

    kwargs: dict[str, Any] = {
        "endpoint": settings.azure_openai_endpoint,
        "deployment_name": settings.azure_openai_deployment_name,
    }
    if settings.azure_openai_api_version:
        kwargs["api_version"] = settings.azure_openai_api_version

    if settings.azure_openai_api_key:
        kwargs["api_key"] = settings.azure_openai_api_key
    elif settings.azure_client_id:
        kwargs["credential"] = DefaultAzureCredential(
            managed_identity_client_id=settings.azure_client_id
        )
    else:
        kwargs["credential"] = DefaultAzureCredential()

    logger.info(
        "Creating chat client for deployment %s at %s",
        settings.azure_openai_deployment_name,
        settings.azure_openai_endpoint,
    )
    return AzureOpenAIChatClient(**kwargs)


def create_advisor_agent(client: AzureOpenAIChatClient) -> ChatAgent:
    """Create the pool capacity advisor ChatAgent.

    Tools are not registered here; the analyzer passes the analysis
    functions on the run that needs them.

    Args:
        client: Chat client for LLM access.

    Returns:
        Configured ChatAgent.
    """
    return ChatAgent(
        name="pool-capacity-advisor",
        instructions=AGENT_INSTRUCTIONS,
        chat_client=client,
    )
