"""Turn live Python classes into component descriptors.

Only members declared directly on a class count as structural references:

- class-level annotations (instance fields; ``ClassVar`` is skipped)
- properties, via the getter's return annotation
- ``__init__`` parameters
- parameters of ordinary methods (dunder methods are skipped)

``Optional``, ``Union`` and ``Annotated`` wrappers are looked through; the
element types of containers such as ``list[T]`` are not.
"""

from __future__ import annotations

import functools
import inspect
import logging
import sys
import types
import typing
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from contract.descriptors import (
    ComponentDescriptor,
    DeclaredDependency,
    ExposedMember,
    MemberKind,
    MemberRef,
    NodeMarker,
)
from contract.markers import (
    COMMENT_ATTR,
    DEPENDS_ATTR,
    EXPOSED_ATTR,
    NODE_ATTR,
    Exposed,
)

logger = logging.getLogger(__name__)

_ANNOTATION_ERRORS = (NameError, SyntaxError, TypeError, AttributeError)


def type_id_of(cls: type) -> str:
    """Stable identity for a class: ``module.QualName``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _namespace_for(obj: Any) -> dict[str, Any]:
    if isinstance(obj, type):
        module = sys.modules.get(obj.__module__)
        return dict(vars(module)) if module is not None else {}
    return dict(getattr(obj, "__globals__", {}))


def _resolve_one(name: str, value: str, globalns: dict[str, Any], localns: Any) -> Any:
    holder = type("_AnnotationHolder", (), {"__annotations__": {name: value}})
    return typing.get_type_hints(holder, globalns, localns, include_extras=True)[name]


def _annotations(obj: Any) -> dict[str, Any]:
    """Evaluated annotations declared on ``obj`` itself.

    Falls back to ``typing.get_type_hints`` and then to resolving names one
    by one when some annotation cannot be evaluated; those are dropped.
    """
    try:
        return dict(inspect.get_annotations(obj, eval_str=True))
    except _ANNOTATION_ERRORS:
        pass

    try:
        raw = inspect.get_annotations(obj)
    except _ANNOTATION_ERRORS as exc:
        logger.debug("Cannot read annotations of %r: %s", obj, exc)
        return {}

    try:
        hints = typing.get_type_hints(obj, include_extras=True)
    except _ANNOTATION_ERRORS:
        hints = {}

    globalns = _namespace_for(obj)
    localns = dict(vars(obj)) if isinstance(obj, type) else None
    resolved: dict[str, Any] = {}
    for name, value in raw.items():
        # get_type_hints merges inherited class annotations; keep own names only
        if name in hints:
            resolved[name] = hints[name]
            continue
        if isinstance(value, str):
            try:
                value = _resolve_one(name, value, globalns, localns)
            except _ANNOTATION_ERRORS as exc:
                logger.debug("Cannot resolve annotation %r on %r: %s", name, obj, exc)
                continue
        resolved[name] = value
    return resolved


def _is_classvar(annotation: Any) -> bool:
    if get_origin(annotation) is Annotated:
        return _is_classvar(get_args(annotation)[0])
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _exposed_marker(annotation: Any) -> Exposed | None:
    if get_origin(annotation) is not Annotated:
        return None
    for extra in get_args(annotation)[1:]:
        if isinstance(extra, Exposed):
            return extra
        if extra is Exposed:
            return Exposed()
    return None


def _class_targets(annotation: Any) -> list[type]:
    """Classes named by an annotation once wrappers are stripped."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _class_targets(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        found: list[type] = []
        for arg in get_args(annotation):
            found.extend(_class_targets(arg))
        return found
    if origin is not None or not isinstance(annotation, type):
        return []
    if annotation.__module__ == "builtins":
        return []
    return [annotation]


def _member_refs(name: str, kind: MemberKind, annotation: Any) -> list[MemberRef]:
    return [
        MemberRef(
            name=name,
            kind=kind,
            type_id=type_id_of(target),
            assignable_to=tuple(
                type_id_of(base) for base in target.__mro__[1:] if base is not object
            ),
        )
        for target in _class_targets(annotation)
    ]


def _property_getter(value: Any) -> Any:
    if isinstance(value, property):
        return value.fget
    if isinstance(value, functools.cached_property):
        return value.func
    return None


def _unwrap_method(value: Any) -> Any:
    if isinstance(value, (staticmethod, classmethod)):
        value = value.__func__
    return value if inspect.isfunction(value) else None


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _parameter_refs(func: Any, kind: MemberKind, owner: str) -> list[MemberRef]:
    refs: list[MemberRef] = []
    for param, annotation in _annotations(func).items():
        if param == "return":
            continue
        refs.extend(_member_refs(f"{owner}.{param}", kind, annotation))
    return refs


def collect_members(cls: type) -> list[MemberRef]:
    """Structural references declared directly on ``cls``."""
    refs: list[MemberRef] = []

    for name, annotation in _annotations(cls).items():
        if _is_classvar(annotation):
            continue
        refs.extend(_member_refs(name, MemberKind.FIELD, annotation))

    for name, value in vars(cls).items():
        getter = _property_getter(value)
        if getter is not None:
            annotation = _annotations(getter).get("return")
            if annotation is not None:
                refs.extend(_member_refs(name, MemberKind.PROPERTY, annotation))
            continue

        func = _unwrap_method(value)
        if func is None:
            continue
        if name == "__init__":
            refs.extend(_parameter_refs(func, MemberKind.CONSTRUCTOR_PARAMETER, name))
        elif not _is_dunder(name):
            refs.extend(_parameter_refs(func, MemberKind.METHOD_PARAMETER, name))

    return refs


def collect_exposed(cls: type) -> list[ExposedMember]:
    """Public exposed fields and properties, including inherited ones."""
    found: dict[str, ExposedMember] = {}

    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, annotation in _annotations(klass).items():
            if name.startswith("_") or name in found or _is_classvar(annotation):
                continue
            marker = _exposed_marker(annotation)
            if marker is not None:
                found[name] = ExposedMember(name=name, alias=marker.alias)

        for name, value in vars(klass).items():
            if name.startswith("_") or name in found:
                continue
            getter = _property_getter(value)
            marker = getattr(getter, EXPOSED_ATTR, None)
            if isinstance(marker, Exposed):
                found[name] = ExposedMember(name=name, alias=marker.alias)

    return list(found.values())


def _dependency_target(cls: type, target: type | str) -> str:
    """Type id of a declared dependency target.

    A name is looked up in the module of ``cls`` first; otherwise it is taken
    to be a ``module.QualName`` type id already.
    """
    if isinstance(target, type):
        return type_id_of(target)

    found: Any = sys.modules.get(cls.__module__)
    for part in target.split("."):
        found = getattr(found, part, None)
        if found is None:
            break
    if isinstance(found, type):
        return type_id_of(found)
    return target


def describe_class(cls: type) -> ComponentDescriptor:
    """Build the descriptor for ``cls`` from its markers and members.

    Markers count only when applied to ``cls`` itself; a subclass of a
    marked class is not a node unless it is marked too.
    """
    own = vars(cls)
    node_info = own.get(NODE_ATTR)
    marker = (
        NodeMarker(display_name=node_info.display_name, tags=node_info.tags)
        if node_info is not None
        else None
    )

    dependencies = tuple(
        DeclaredDependency(target=_dependency_target(cls, info.target), uses=info.uses)
        for info in own.get(DEPENDS_ATTR, ())
    )

    return ComponentDescriptor(
        type_id=type_id_of(cls),
        name=cls.__name__,
        module=cls.__module__,
        is_abstract=inspect.isabstract(cls),
        marker=marker,
        comment=own.get(COMMENT_ATTR),
        dependencies=dependencies,
        members=tuple(collect_members(cls)),
        exposed=tuple(collect_exposed(cls)),
    )


__all__ = [
    "collect_exposed",
    "collect_members",
    "describe_class",
    "type_id_of",
]
