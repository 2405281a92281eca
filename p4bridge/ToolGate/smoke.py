"""
Gateway connectivity smoke check.

Hits health, info, files and changes on a running gateway and prints what
came back. Exits 1 on the first failure.

Usage:
    python -m p4bridge.ToolGate.smoke
    PERFORCE_API_URL=http://gateway:3000/api python -m p4bridge.ToolGate.smoke
"""

import asyncio
import sys
from typing import Optional

from p4bridge import Config
from p4bridge.ToolGate.client import GatewayClient, GatewayError
from p4bridge.ToolGate.registry import ToolRegistry


async def run_checks(client: GatewayClient) -> bool:
    """Run the checks in order; False at the first failure."""
    print("Testing Perforce API connection...")
    print(f"API URL: {client.base_url}")

    try:
        print("\n1. Testing health endpoint...")
        health = await client.health()
        print(f"✅ Health check passed: {health.get('status')}")

        print("\n2. Testing server info...")
        info = (await client.get("/info")).get("data") or {}
        print("✅ Server info retrieved successfully")
        print(f"Server info keys: {list(info.keys())}")

        print("\n3. Testing list files...")
        files = (await client.get("/files")).get("data") or {}
        print("✅ Files listed successfully")
        print(f"Files count: {files.get('count', 0)}")

        print("\n4. Testing list changes...")
        changes = (await client.get("/changes")).get("data") or {}
        print("✅ Changes listed successfully")
        print(f"Changes count: {changes.get('count', 0)}")
    except GatewayError as e:
        print(f"\n❌ Test failed: {e}", file=sys.stderr)
        return False

    print("\n🎉 All checks passed.")
    print("\nAvailable tools:")
    for tool in ToolRegistry.list_tools():
        print(f"   - {tool.name}: {tool.description}")
    return True


def main(base_url: Optional[str] = None) -> int:
    manager = Config.get_manager()
    client = GatewayClient(
        base_url=base_url or manager.get("PERFORCE_API_URL"),
        timeout=manager.get("PERFORCE_API_TIMEOUT"),
    )
    return 0 if asyncio.run(run_checks(client)) else 1


if __name__ == "__main__":
    sys.exit(main())
