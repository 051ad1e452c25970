"""Tool call handlers for MCP Git Tool"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from mcp.types import TextContent, Tool

from ..config import AdapterConfig
from ..errors import ExecutionFailure, GitToolError
from .tools import GitOperationAdapter

logger = logging.getLogger(__name__)


class CallToolHandler:
    """Turns MCP tool calls into adapter calls and adapter outcomes into text"""

    def __init__(self, config: Optional[AdapterConfig] = None):
        self.config = config or AdapterConfig()
        self.adapter = GitOperationAdapter(self.config)

    def list_tools(self) -> List[Tool]:
        return [self.adapter.as_tool()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Main tool call entry point"""
        request_id = os.urandom(4).hex()
        operation = (arguments or {}).get("operation")
        extra = {"request_id": request_id, "operation": operation}
        logger.info(f"🔧 [{request_id}] Tool call: {name} ({operation})", extra=extra)

        if name != self.adapter.name:
            return [TextContent(type="text", text=f"❌ Unknown tool: {name}")]

        start_time = time.time()
        try:
            _, summary = await self.adapter.execute(arguments or {}, timeout=self.config.timeout)
        except ExecutionFailure as e:
            duration_ms = round((time.time() - start_time) * 1000, 1)
            logger.warning(
                f"❌ [{request_id}] {e}",
                extra={**extra, "duration_ms": duration_ms},
            )
            text = f"❌ {e}"
            if e.output:
                text += f"\n{e.output}"
            return [TextContent(type="text", text=text)]
        except GitToolError as e:
            logger.warning(f"❌ [{request_id}] {e}", extra=extra)
            return [TextContent(type="text", text=f"❌ {e}")]
        except Exception as e:
            logger.error(
                f"❌ [{request_id}] Tool '{name}' failed: {e}", exc_info=True, extra=extra
            )
            return [TextContent(type="text", text=f"❌ Error in {name}: {e}")]

        duration_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            f"✅ [{request_id}] {operation} completed in {duration_ms}ms",
            extra={**extra, "duration_ms": duration_ms},
        )
        return [TextContent(type="text", text=summary)]
