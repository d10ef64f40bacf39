from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

from showcase.client.demo import DemoClient, DemoResult

SAMPLE_USER = {"name": "Jane Doe", "email": "jane@example.com", "age": 28}

# name -> (kind, method, path, json body)
DEMOS: dict[str, tuple[str, str, str, Any]] = {
    "health": ("json", "GET", "/api/health", None),
    "routing": ("json", "GET", "/api/showcase/routing/basic", None),
    "query": ("json", "GET", "/api/showcase/routing/query?page=1&sort=name&tag=a&tag=b", None),
    "params": ("json", "GET", "/api/showcase/routing/v2/42", None),
    "methods": ("json", "PUT", "/api/showcase/routing/methods", None),
    "middleware": ("json", "GET", "/api/showcase/middleware", None),
    "context": ("json", "GET", "/api/showcase/context", None),
    "validation": ("json", "POST", "/api/showcase/validation", SAMPLE_USER),
    "validation-invalid": ("json", "POST", "/api/showcase/validation", {"name": "J", "age": 200}),
    "streaming": ("lines", "GET", "/api/showcase/streaming", None),
    "sse": ("events", "GET", "/api/showcase/sse", None),
    "error-http": ("json", "GET", "/api/showcase/error?type=http", None),
    "error-notfound": ("json", "GET", "/api/showcase/error?type=notfound", None),
    "error-server": ("json", "GET", "/api/showcase/error?type=server", None),
    "cors": ("json", "GET", "/api/showcase/cors", None),
}


def _print_result(result: DemoResult) -> None:
    print(f"HTTP {result.status_code}  ({result.elapsed_ms:.1f} ms)")
    for name, value in result.headers.items():
        print(f"  {name}: {value}")
    print(json.dumps(result.body, indent=2) if not isinstance(result.body, str) else result.body)


async def run_demo(name: str, base_url: str, token: str | None) -> None:
    kind, method, path, body = DEMOS[name]
    async with DemoClient(base_url, token=token) as client:
        if kind == "lines":
            async for line in client.stream_lines(path):
                print(line, flush=True)
        elif kind == "events":
            async for event in client.stream_events(path):
                print(f"[{event.event}] {event.data}", flush=True)
        else:
            _print_result(await client.call(method, path, json=body))


def main() -> None:
    parser = argparse.ArgumentParser(description="Framework showcase demo client")
    parser.add_argument("demo", choices=sorted(DEMOS), help="Demo to run")
    parser.add_argument("--base-url", default="http://localhost:3001", help="Backend base URL")
    parser.add_argument("--token", default=None, help="Bearer token to send (never validated)")
    args = parser.parse_args()

    asyncio.run(run_demo(args.demo, args.base_url, args.token))


if __name__ == "__main__":
    main()
