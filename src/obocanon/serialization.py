"""
Serialization helpers for Document objects.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This is a debugging and fixture format, not a replacement for OBO text:
unlike the canonical writer it keeps clauses in their stored order.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from obocanon.model import Clause, Document, Frame, Qualifier, Xref
from obocanon.tags import FrameType


def xref_to_dict(x: Xref) -> Dict[str, Any]:
    return {"idref": x.idref, "annotation": x.annotation}


def xref_from_dict(d: Dict[str, Any]) -> Xref:
    return Xref(idref=d["idref"], annotation=d.get("annotation"))


def clause_to_dict(c: Clause) -> Dict[str, Any]:
    return {
        "tag": c.tag,
        "value": c.value,
        "value2": c.value2,
        "extra": list(c.extra),
        "qualifiers": [{"key": q.key, "value": q.value} for q in c.qualifiers],
        "xrefs": [xref_to_dict(x) for x in c.xrefs],
        "comment": c.comment,
    }


def clause_from_dict(d: Dict[str, Any]) -> Clause:
    return Clause(
        tag=d["tag"],
        value=d.get("value"),
        value2=d.get("value2"),
        extra=tuple(d.get("extra", [])),
        qualifiers=tuple(Qualifier(key=q["key"], value=q["value"]) for q in d.get("qualifiers", [])),
        xrefs=tuple(xref_from_dict(x) for x in d.get("xrefs", [])),
        comment=d.get("comment"),
    )


def frame_to_dict(f: Frame) -> Dict[str, Any]:
    return {
        "frame_type": f.frame_type.value,
        "id": f.id,
        "clauses": [clause_to_dict(c) for c in f.clauses],
    }


def frame_from_dict(d: Dict[str, Any]) -> Frame:
    return Frame(
        frame_type=FrameType(d["frame_type"]),
        id=d.get("id"),
        clauses=[clause_from_dict(c) for c in d.get("clauses", [])],
    )


def document_to_dict(doc: Document) -> Dict[str, Any]:
    return {
        "header": frame_to_dict(doc.header),
        "terms": [frame_to_dict(f) for f in doc.terms.values()],
        "typedefs": [frame_to_dict(f) for f in doc.typedefs.values()],
        "instances": [frame_to_dict(f) for f in doc.instances.values()],
    }


def document_from_dict(d: Dict[str, Any]) -> Document:
    doc = Document()
    if d.get("header"):
        doc.header = frame_from_dict(d["header"])
    for key in ("terms", "typedefs", "instances"):
        for fd in d.get(key, []):
            doc.add_frame(frame_from_dict(fd))
    return doc


def document_to_json(doc: Document) -> str:
    return json.dumps(document_to_dict(doc), sort_keys=True)


def document_from_json(s: str) -> Document:
    d = json.loads(s)
    return document_from_dict(d)


def document_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(document_to_dict(doc), sort_keys=False)


def document_from_yaml(s: str) -> Document:
    d = yaml.safe_load(s)
    return document_from_dict(d)
