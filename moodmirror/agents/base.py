"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import logging
import os
from typing import Any, Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner, set_default_openai_key

logger = logging.getLogger(__name__)

# Default model to use for agents
DEFAULT_MODEL = "gpt-4o-mini"


def get_model(configured: Optional[str] = None) -> str:
    """Get the model to use for agents.
    
    Checks OPENAI_MODEL environment variable, then the configured value,
    and falls back to the default.
    
    Returns:
        Model name string.
    """
    return os.environ.get("OPENAI_MODEL") or configured or DEFAULT_MODEL


def get_api_key(configured: Optional[str] = None) -> Optional[str]:
    """Get the OpenAI API key.
    
    Returns:
        API key string or None if not configured.
    """
    return os.environ.get("OPENAI_API_KEY") or configured or None


def configure_api_key(api_key: str) -> None:
    """Make an API key from the config file visible to the SDK."""
    set_default_openai_key(api_key)


def create_agent(
    name: str,
    instructions: str,
    model: Optional[str] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.
    
    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        model: Optional model override. Uses default if not specified.
        
    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        model=model or get_model(),
    )


def run_agent_sync(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> str:
    """Run an agent synchronously and return the response.
    
    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.
        
    Returns:
        Agent's response as a string.
    """
    logger.debug("Agent: %s | Model: %s", agent.name, agent.model)
    result = Runner.run_sync(agent, message, context=context)
    return result.final_output


async def run_agent_async(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> str:
    """Run an agent asynchronously and return the response.
    
    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.
        
    Returns:
        Agent's response as a string.
    """
    logger.debug("Agent: %s | Model: %s", agent.name, agent.model)
    result = await Runner.run(agent, message, context=context)
    return result.final_output
