"""Example RPC client calling the foo provider of examples/server.py.

To run: RELAY_RPC_URL=http://127.0.0.1:8000/rpc python client.py
"""
import asyncio
import os

from relay_rpc import HttpRpcClient


async def main() -> None:
    os.environ.setdefault("RELAY_RPC_URL", "http://127.0.0.1:8000/rpc")
    client = HttpRpcClient.from_env()
    foo = client.get("foo")

    print("Calling get_foo procedure on foo provider...")
    result = await foo.get_foo()
    print(f"Result of get_foo: {result}")

    print("Calling set_foo procedure on foo provider...")
    result = await foo.set_foo("bar")
    print(f"Result of set_foo: {result}")


if __name__ == "__main__":
    asyncio.run(main())
