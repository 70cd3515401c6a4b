#!/usr/bin/env python3
"""Live catalog verification — run manually against the configured provider.

Usage:
  1. Set CATALOG_BASE_URL in .env
  2. Run: python scripts/verify_catalog.py "iPhone 15 Pro"

Steps:
  Step 1: Show configuration
  Step 2: Search the catalog
  Step 3: Fetch the first device and extract its SIM entry

Steps are spaced by the throttle interval so the provider sees the same
request rate as the API produces.
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def step_header(n: int, title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  Step {n}: {title}")
    print(f"{'='*60}\n")


def ok(msg: str) -> None:
    print(f"  ✅ {msg}")


def fail(msg: str) -> None:
    print(f"  ❌ {msg}")


def info(msg: str) -> None:
    print(f"  ℹ️  {msg}")


async def main(query: str) -> int:
    from esim_check.config import settings
    from esim_check.errors import EsimCheckError
    from esim_check.integrations.catalog import CatalogClient
    from esim_check.services.extractor import extract_sim_info
    from esim_check.services.throttle import ThrottleGate

    step_header(1, "Configuration")
    ok(f"Catalog: {settings.catalog_base_url}")
    ok(f"Min interval: {settings.min_interval_seconds}s | cooldown: {settings.upstream_cooldown_seconds}s")

    gate = ThrottleGate(settings.min_interval_seconds, settings.upstream_cooldown_seconds)
    client = CatalogClient(settings.catalog_base_url, gate, timeout=settings.catalog_timeout_seconds)

    step_header(2, "Catalog search")
    info(f"Searching: '{query}'")
    try:
        results = await client.search(query)
    except EsimCheckError as e:
        fail(f"Search failed ({e.kind.value}): {e}")
        return 1
    if not results:
        fail("No results returned — check the query or CATALOG_BASE_URL")
        return 1
    ok(f"Got {len(results)} results")
    for r in results[:5]:
        print(f"    - [{r.id}] {r.name}")

    await asyncio.sleep(settings.min_interval_seconds)

    step_header(3, "Device detail + SIM extraction")
    first = results[0]
    try:
        device = await client.get_device(first.id)
    except EsimCheckError as e:
        fail(f"Device fetch failed ({e.kind.value}): {e}")
        return 1
    ok(f"Device: {device.name or first.name} | sections={len(device.detail_spec)}")

    sim = extract_sim_info(device)
    if sim.simRaw is None:
        fail("No SIM entry found in the device spec")
        return 1
    ok(f"SIM: {sim.simRaw}")
    ok(f"Supports eSIM: {sim.supportsEsim}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "iPhone 15 Pro")))
