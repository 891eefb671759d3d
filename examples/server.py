"""Example RPC server exposing FooProvider on POST /rpc.

To run: uvicorn server:app --port 8000
"""
from foo_provider import FooProvider

from relay_rpc import HttpRpcRouter

router = HttpRpcRouter.from_env({"foo": FooProvider()})

app = router.asgi_app("/rpc")
