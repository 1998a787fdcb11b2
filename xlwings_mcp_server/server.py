"""
Server assembly: owns the xlwings-rpc client and the tool instances
"""

import logging
from typing import List, Optional

from .client import XlwingsRpcClient
from .config import Settings, get_settings
from .tools import TOOL_CLASSES, BaseTool

logger = logging.getLogger(__name__)


class XlwingsMCPServer:
    """Wire the RPC client into every tool group"""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[XlwingsRpcClient] = None):
        self.settings = settings or get_settings()
        self.client = client
        self.tools: List[BaseTool] = []

    async def initialize(self):
        """Create the client and tool instances"""
        if self.client is None:
            self.client = XlwingsRpcClient(settings=self.settings)
        await self.client.connect()

        self.tools = [tool_class(self.client, self.settings) for tool_class in TOOL_CLASSES]
        logger.info(f"Initialized {len(self.tools)} tool groups for {self.client.url}")

    async def cleanup(self):
        """Release the HTTP client"""
        if self.client is not None:
            await self.client.close()
