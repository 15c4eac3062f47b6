from .asyncio_fetch_executor import AsyncioFetchExecutor
from .frame_buffer import FrameBuffer
from .map_session import MapSession

__all__ = ["AsyncioFetchExecutor", "FrameBuffer", "MapSession"]
