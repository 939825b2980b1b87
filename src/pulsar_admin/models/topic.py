"""
Topic names: `persistent://tenant/namespace/topic` and its short forms.
"""

from __future__ import annotations

from typing import Union
from urllib.parse import quote

from pydantic import BaseModel

from pulsar_admin.errors import InvalidTopicName

DOMAINS = ("persistent", "non-persistent")
DEFAULT_TENANT = "public"
DEFAULT_NAMESPACE = "default"


class TopicName(BaseModel):
    domain: str = "persistent"
    tenant: str
    namespace: str
    local_name: str

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, name: str) -> TopicName:
        """Accepts `topic`, `tenant/ns/topic` or `domain://tenant/ns/topic`."""
        if not name:
            raise InvalidTopicName("topic name is empty")
        domain = "persistent"
        rest = name
        if "://" in name:
            domain, rest = name.split("://", 1)
            if domain not in DOMAINS:
                raise InvalidTopicName(f"unknown topic domain {domain!r} in {name!r}")
        elif "/" not in name:
            rest = f"{DEFAULT_TENANT}/{DEFAULT_NAMESPACE}/{name}"

        parts = rest.split("/", 2)
        if len(parts) != 3 or not all(parts):
            raise InvalidTopicName(f"invalid topic name {name!r}: expected tenant/namespace/topic")
        tenant, namespace, local_name = parts
        return cls(domain=domain, tenant=tenant, namespace=namespace, local_name=local_name)

    @property
    def rest_path(self) -> str:
        return f"{self.domain}/{self.tenant}/{self.namespace}/{quote(self.local_name, safe='')}"

    def __str__(self) -> str:
        return f"{self.domain}://{self.tenant}/{self.namespace}/{self.local_name}"


def as_topic(topic: Union[TopicName, str]) -> TopicName:
    return topic if isinstance(topic, TopicName) else TopicName.parse(topic)
