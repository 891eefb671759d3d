"""Example provider holding a single string value."""


class FooProvider:
    """Gets and sets the value of foo.

    The value lives on the instance, so each router owns its own state.
    """

    def __init__(self, foo: str = "Foo") -> None:
        self._foo = foo

    def get_foo(self) -> str:
        """Get the current value of foo."""
        return self._foo

    def set_foo(self, foo: str) -> str:
        """Set a new value for foo and return it."""
        print(f"Invoked set_foo with {foo}")
        self._foo = foo
        return self._foo
