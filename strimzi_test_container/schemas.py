from typing import List

from pydantic import BaseModel, Field

PLAINTEXT = "PLAINTEXT"


class KafkaListener(BaseModel):
    name: str = Field(..., description="unique listener name, i.e: BROKER1")
    host: str = Field(..., description="address the listener binds to or is advertised at")
    port: int = Field(..., description="listener port inside the container")
    security_protocol: str = Field(
        PLAINTEXT, description="security protocol the listener name maps to"
    )

    @property
    def url(self) -> str:
        return f"{self.name}://{self.host}:{self.port}"


class ListenerConfiguration(BaseModel):
    """Listeners of a single broker, derived once the container addresses are
    known."""

    bootstrap_servers: str = Field(
        ..., description="externally reachable address, always advertised first"
    )
    bound_listeners: List[KafkaListener] = Field(
        ..., description="listeners the broker binds, the plaintext client listener last"
    )
    advertised_listeners: List[KafkaListener] = Field(
        ..., description="one listener per network the container is attached to"
    )
    inter_broker_listener_name: str

    @property
    def listeners(self) -> str:
        return ",".join(listener.url for listener in self.bound_listeners)

    @property
    def advertised(self) -> str:
        return ",".join(
            [self.bootstrap_servers]
            + [listener.url for listener in self.advertised_listeners]
        )

    @property
    def security_protocol_map(self) -> str:
        return ",".join(
            f"{listener.name}:{listener.security_protocol}"
            for listener in self.bound_listeners
        )
