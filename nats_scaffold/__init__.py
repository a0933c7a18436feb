"""nats-scaffold: generate NATS request/response services from protobuf definitions."""

__version__ = "0.1.0"
