"""Focused example: how the constructor to call is selected."""

from __future__ import annotations

from ctorwire import DependencyInjectingInstantiator, ServiceRegistry, constructor, inject


class Settings:
    def __init__(self) -> None:
        self.source = "defaults"


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn

    @inject
    @classmethod
    def from_settings(cls, settings: Settings) -> Connection:
        return cls(f"sqlite://{settings.source}")

    @constructor
    @classmethod
    def in_memory(cls) -> Connection:
        return cls("sqlite://:memory:")


def main() -> None:
    instantiator = DependencyInjectingInstantiator(ServiceRegistry())

    settings = instantiator.new_instance(Settings)
    connection = instantiator.new_instance(Connection, settings)

    print(f"settings={settings.source}")  # => settings=defaults
    print(f"dsn={connection.dsn}")  # => dsn=sqlite://defaults


if __name__ == "__main__":
    main()
