import logging
from typing import Any, Optional, Tuple

from .config import DEFAULT_CONFIG, FlattenConfig
from .errors import CyclicValueError, InvalidInputKind
from .extract import deref, extract, is_composite
from .fields import describe_fields, resolve_key
from .refs import FieldRef, ValueRef
from .types import FlatMap

logger = logging.getLogger(__name__)


def traverse(
    value: Any,
    prefix: str,
    output: FlatMap,
    config: FlattenConfig = DEFAULT_CONFIG,
    active: Tuple[Any, ...] = (),
) -> int:
    """Add the leaves of value to output under prefix.

    Nested composites are flattened into the output. One that contributes no
    entries at all is stored whole under its own key instead. Returns the
    number of entries added, which is how the caller tells the two apart.
    """
    if any(parent is value for parent in active):
        raise CyclicValueError(prefix[:-len(config.separator)] if prefix else prefix, value)
    active = active + (value,)

    added = 0
    for field in describe_fields(value, config):
        if not field.exported:
            continue

        raw = getattr(value, field.name)
        key, skip, promoted = resolve_key(field, raw, config)
        if skip or (not key and not promoted):
            logger.debug(f"Skipping field {type(value).__name__}.{field.name}")
            continue

        child = extract(raw, raw)
        child_prefix = prefix if promoted else prefix + key + config.separator

        if is_composite(child):
            child_added = traverse(child, child_prefix, output, config, active)
            if child_added:
                added += child_added
                continue
            logger.debug(f"{type(child).__name__} at {prefix + key!r} has no leaves, storing it whole")

        output[prefix + key] = FieldRef(value, field.name) if child is raw else ValueRef(child)
        added += 1

    return added


def flatten(value: Any, config: Optional[FlattenConfig] = None) -> FlatMap:
    """Flatten a model or dataclass instance into a FlatMap.

    value may also be a reference, weak reference or RootModel leading to one.
    """
    config = config or DEFAULT_CONFIG

    target = deref(value)
    if not is_composite(target):
        raise InvalidInputKind(value)

    output = FlatMap()
    traverse(target, "", output, config)
    logger.debug(f"Flattened {type(target).__name__} into {len(output)} entries")
    return output
