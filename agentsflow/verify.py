#!/usr/bin/env python3
"""Smoke test a running server: ``agentsflow-verify``.

Waits for the server to come up, checks the services listing (database
connectivity), then sends one chat request through each AI backend and prints
a pass/fail line per check.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass

import httpx

from agentsflow.config import get_settings

DEFAULT_STARTUP_DELAY = 5.0
REQUEST_TIMEOUT = 300.0
PING_MESSAGES = [{"role": "user", "content": "Ping"}]


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str

    def render(self) -> str:
        mark = "PASS" if self.ok else "FAIL"
        return f"[{mark}] {self.name}: {self.detail}"


async def check_services(client: httpx.AsyncClient) -> CheckResult:
    try:
        response = await client.get("/api/services")
        response.raise_for_status()
    except httpx.HTTPError as exc:
        return CheckResult("Services", False, _describe(exc))
    return CheckResult("Services", True, f"status {response.status_code}, found {len(response.json())} services")


async def check_generation(
    client: httpx.AsyncClient,
    name: str,
    provider: str,
    model: str,
) -> CheckResult:
    try:
        response = await client.post(
            "/api/ai/generate",
            json={"model": model, "provider": provider, "messages": PING_MESSAGES},
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        return CheckResult(name, False, _describe(exc))
    return CheckResult(name, True, response.json().get("response", ""))


async def run_checks(
    base_url: str,
    local_model: str,
    cloud_model: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[CheckResult]:
    async with httpx.AsyncClient(
        base_url=base_url,
        timeout=REQUEST_TIMEOUT,
        transport=transport,
    ) as client:
        return [
            await check_services(client),
            await check_generation(client, "Local (Ollama)", "local", local_model),
            await check_generation(client, "Cloud (Gemini)", "cloud", cloud_model),
        ]


def _describe(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"status {exc.response.status_code}: {exc.response.text}"
    return str(exc) or exc.__class__.__name__


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Smoke test the agentsflow server.")
    parser.add_argument("--base-url", default=settings.GATEWAY_URL)
    parser.add_argument("--delay", type=float, default=DEFAULT_STARTUP_DELAY,
                        help="seconds to wait for the server before checking")
    parser.add_argument("--local-model", default="ministral-3:3b")
    parser.add_argument("--cloud-model", default=settings.DEFAULT_CLOUD_MODEL)
    return parser


async def _main(args: argparse.Namespace) -> int:
    await asyncio.sleep(args.delay)
    print(f"Verifying {args.base_url} ...")
    results = await run_checks(args.base_url, args.local_model, args.cloud_model)
    for result in results:
        print(result.render())
    return 0 if all(result.ok for result in results) else 1


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    sys.exit(asyncio.run(_main(args)))


if __name__ == "__main__":
    main()
