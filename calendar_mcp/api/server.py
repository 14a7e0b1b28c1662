### --- standard + typing utilities --- ###
from typing import Any, Dict, List
from pydantic import BaseModel

### --- third-party libraries --- ###
from fastapi import Body, FastAPI

### --- project imports --- ###
from calendar_mcp.api.dispatcher import Dispatcher
from calendar_mcp.domain.schemas import ToolResult


class ToolOut(BaseModel):
    """One entry of GET /tools."""
    name: str
    description: str
    inputSchema: Dict[str, Any]


def create_app(dispatcher: Dispatcher) -> FastAPI:
    """
    HTTP surface over the same dispatcher the MCP server uses.
    Tool failures come back as 200 + is_error envelopes, same as over MCP.
    """
    app = FastAPI(title="Calendar MCP - tool endpoints")

    @app.get("/healthz")
    def healthz():
        """Health probe."""
        return {"ok": True}

    @app.get("/tools", response_model=List[ToolOut])
    def list_tools():
        """List registered tools with their parameter schemas."""
        return [
            ToolOut(name=d.name, description=d.description, inputSchema=d.input_schema())
            for d in dispatcher.registry.descriptors()
        ]

    @app.post("/tools/{name}", response_model=ToolResult)
    async def call_tool(name: str, arguments: Dict[str, Any] = Body(default_factory=dict)):
        """Invoke a tool by name. Inputs: JSON object of arguments. Returns: ToolResult envelope."""
        return await dispatcher.call(name, arguments)

    return app


### ---------------------- curl examples ---------------------------- ###
"""
# Health
curl -s localhost:8765/healthz

# Tools
curl -s localhost:8765/tools | jq '.[].name'

curl -sX POST localhost:8765/tools/get_events -H "content-type: application/json" \
  -d '{"startDate":"2025-08-18","endDate":"2025-08-25"}'

curl -sX POST localhost:8765/tools/add_event -H "content-type: application/json" \
  -d '{"title":"Sync","start":"2025-08-18T10:00:00-05:00","end":"2025-08-18T10:30:00-05:00"}'

curl -sX POST localhost:8765/tools/get_coordinates -H "content-type: application/json" \
  -d '{"place":"Heidelberg"}'
"""
