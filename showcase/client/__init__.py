from showcase.client.demo import DemoClient, DemoResult
from showcase.client.sse import SSEDecoder, SSEEvent, parse_sse

__all__ = ["DemoClient", "DemoResult", "SSEDecoder", "SSEEvent", "parse_sse"]
