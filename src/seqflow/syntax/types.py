"""AST data structures for the sequence-diagram DSL.

These types represent the parsed form of the input source: a Diagram root
holding participants, messages and flow declarations. Every message carries
a fully populated Annotations record so consumers never check for missing
keys. ``to_dict`` produces the camelCase shape read by rendering and editor
tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from seqflow.types import ArrowHead, LineStyle, ParticipantType, PayloadKind


@dataclass
class Payload:
    kind: PayloadKind
    url: str | None = None
    schema: str | None = None

    @classmethod
    def reference(cls, url: str) -> Payload:
        return cls(kind=PayloadKind.Reference, url=url)

    @classmethod
    def inline(cls, schema: str) -> Payload:
        return cls(kind=PayloadKind.Inline, schema=schema)

    def to_dict(self) -> dict[str, Any]:
        if self.kind == PayloadKind.Reference:
            return {"type": self.kind.value, "url": self.url}
        return {"type": self.kind.value, "schema": self.schema}


@dataclass
class Annotations:
    path: str | None = None
    method: str | None = None
    request_type: str | None = None
    is_async: bool = False
    timeout: str | None = None
    queue: str | None = None
    flows: list[str] = field(default_factory=list)
    request: Payload | None = None
    response: Payload | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "requestType": self.request_type,
            "isAsync": self.is_async,
            "timeout": self.timeout,
            "queue": self.queue,
            "flows": list(self.flows),
            "request": self.request.to_dict() if self.request else None,
            "response": self.response.to_dict() if self.response else None,
        }


@dataclass
class Arrow:
    line: LineStyle
    head: ArrowHead

    @property
    def literal(self) -> str:
        """The arrow text that produces this (line, head) pair."""
        body = "--" if self.line == LineStyle.Dashed else "-"
        tip = ">>" if self.head == ArrowHead.Filled else ">"
        return body + tip

    def to_dict(self) -> dict[str, str]:
        return {"line": self.line.value, "head": self.head.value}


@dataclass
class Participant:
    id: str
    display_name: str
    participant_type: ParticipantType = field(default_factory=ParticipantType.default)

    @classmethod
    def new(cls, id: str, display_name: str) -> Participant:
        return cls(id=id, display_name=display_name)

    @classmethod
    def bare(cls, id: str) -> Participant:
        """Create an inferred participant (display name = id)."""
        return cls(id=id, display_name=id)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "participantType": self.participant_type.value,
        }


@dataclass
class Message:
    source: str
    target: str
    arrow: Arrow
    text: str = ""
    annotations: Annotations = field(default_factory=Annotations)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "text": self.text,
            "arrow": self.arrow.to_dict(),
            "annotations": self.annotations.to_dict(),
        }


@dataclass
class FlowDefinition:
    id: str
    display_name: str
    color: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"id": self.id, "displayName": self.display_name, "color": self.color}


@dataclass
class Diagram:
    title: str = ""
    description: str = ""
    system: str = ""
    version: str = ""
    participants: list[Participant] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    flows: list[FlowDefinition] = field(default_factory=list)

    @classmethod
    def new(cls) -> Diagram:
        return cls()

    def participant(self, id: str) -> Participant | None:
        return next((p for p in self.participants if p.id == id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "system": self.system,
            "version": self.version,
            "participants": [p.to_dict() for p in self.participants],
            "messages": [m.to_dict() for m in self.messages],
            "flows": [f.to_dict() for f in self.flows],
        }
