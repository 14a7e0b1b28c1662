"""Routes tool invocations to handlers and wraps every outcome in a ToolResult."""

import asyncio
import inspect
import json
import logging
from typing import Any, Dict, Optional

from calendar_mcp.api.registry import ToolRegistry
from calendar_mcp.domain.errors import CalendarMCPError
from calendar_mcp.domain.schemas import ToolInvocation, ToolResult

logger = logging.getLogger(__name__)


class Dispatcher:
    """Single entry point between a host transport and the tool handlers.

    dispatch() never raises: unknown tools, bad arguments, upstream failures
    and unexpected handler bugs all come back as failure envelopes, so the
    host keeps serving later calls.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def call(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        return await self.dispatch(ToolInvocation(tool_name=tool_name, arguments=arguments or {}))

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.tool_name
        try:
            _, handler = self.registry.get(name)
            params = self.registry.validate(name, invocation.arguments)
            if inspect.iscoroutinefunction(handler):
                result = await handler(params)
            else:
                # blocking clients (googleapiclient .execute()) run off the event loop
                result = await asyncio.to_thread(handler, params)
            text = json.dumps(result)
        except CalendarMCPError as e:
            logger.info("tool %s failed: %s: %s", name, type(e).__name__, e)
            return ToolResult.failure(str(e))
        except Exception as e:
            logger.exception("tool %s raised unexpectedly", name)
            return ToolResult.failure(f"Error running {name}: {e}")
        return ToolResult.success(text)
