"""Tool execution API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, HTTPException

from ..dependencies import get_tool_dispatcher
from ..schemas import ToolExecuteRequest, ToolExecuteResponse, ToolListResponse

logger = logging.getLogger(__name__)


def register_tool_routes(app: FastAPI) -> None:
    """Register tool execution routes"""
    router = APIRouter(prefix="/api/tools", tags=["tools"])

    @router.post("/execute", response_model=ToolExecuteResponse)
    async def execute_tool(request: ToolExecuteRequest) -> ToolExecuteResponse:
        """
        Execute a tool with given arguments

        Args:
            request: Tool execution request

        Returns:
            Envelope with text content and an error flag
        """
        dispatcher = get_tool_dispatcher()
        try:
            result = await dispatcher.call(request.tool, request.args)
            return ToolExecuteResponse.model_validate(result)
        except Exception as e:
            logger.exception("Tool %s failed: %s", request.tool, e)
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/list", response_model=ToolListResponse)
    def list_tools() -> ToolListResponse:
        """
        List all available tools

        Returns:
            Tool names, descriptions and argument schemas
        """
        return ToolListResponse(tools=get_tool_dispatcher().list_tools())

    app.include_router(router)
