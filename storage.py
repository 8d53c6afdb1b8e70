import json
from typing import Iterable, List

import config
from model import AnyElement, ElementDecodeError, element_from_dict


def serialize(elements: Iterable[AnyElement]) -> bytes:
    payload = [element.to_dict() for element in elements]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def deserialize(data: bytes) -> List[AnyElement]:
    try:
        payload = json.loads(data)
    except (ValueError, RecursionError) as exc:
        raise ElementDecodeError(f"invalid JSON: {exc}") from exc
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ElementDecodeError(f"expected a JSON array of elements, got {type(payload).__name__}")

    elements = [element_from_dict(item) for item in payload]
    seen = set()
    for element in elements:
        if element.id in seen:
            raise ElementDecodeError(f"duplicate element id {element.id}")
        seen.add(element.id)
    return elements


def ensure_json_extension(path: str) -> str:
    if not path.lower().endswith(config.PROJECT_EXTENSION):
        return path + config.PROJECT_EXTENSION
    return path


def save_elements(elements: Iterable[AnyElement], path: str) -> None:
    data = serialize(elements)
    with open(path, "wb") as file:
        file.write(data)


def load_elements(path: str) -> List[AnyElement]:
    with open(path, "rb") as file:
        data = file.read()
    return deserialize(data)
