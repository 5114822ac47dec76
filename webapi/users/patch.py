"""
JSON Patch support for partial user updates.

Operations are applied in order to a transient copy of the user's writable
fields. Problems with individual operations are recorded in the supplied
``ValidationResult`` (keyed by the targeted field, or ``patch`` when the
path cannot be resolved) and the remaining operations still run, so the
caller can report everything in a single 422 response.
"""
from typing import Dict, Iterable, Optional

from webapi.users.schemas import PatchOperation, UserInfoDto
from webapi.users.validation import ValidationResult

PATCH_ERROR_KEY = "patch"

_FIELDS = {
    "login": "login",
    "firstname": "firstName",
    "lastname": "lastName",
}


def resolve_path(path: Optional[str]) -> Optional[str]:
    """Map a JSON pointer such as ``/firstName`` to its wire field name."""
    if not path or not path.startswith("/"):
        return None
    segment = path[1:]
    if "/" in segment:
        return None
    return _FIELDS.get(segment.replace("~1", "/").replace("~0", "~").lower())


def apply_patch(
    user: UserInfoDto,
    operations: Iterable[PatchOperation],
    result: ValidationResult,
) -> UserInfoDto:
    """Return a patched copy of *user*; *user* itself is left untouched."""
    document: Dict[str, Optional[str]] = user.model_dump(by_alias=True)

    for operation in operations:
        op = (operation.op or "").lower()
        target = resolve_path(operation.path)
        if target is None:
            result.add_error(PATCH_ERROR_KEY, f"The target location specified by path segment '{operation.path}' was not found.")
            continue

        if op in ("add", "replace"):
            if operation.value is not None and not isinstance(operation.value, str):
                result.add_error(target, f"The value '{operation.value}' is invalid for target location.")
                continue
            document[target] = operation.value
        elif op == "remove":
            document[target] = None
        elif op in ("copy", "move"):
            source = resolve_path(operation.from_)
            if source is None:
                result.add_error(PATCH_ERROR_KEY, f"The target location specified by path segment '{operation.from_}' was not found.")
                continue
            document[target] = document[source]
            if op == "move" and source != target:
                document[source] = None
        elif op == "test":
            if document[target] != operation.value:
                result.add_error(
                    target,
                    f"The current value '{document[target]}' at path '{operation.path}' "
                    f"is not equal to the test value '{operation.value}'.",
                )
        else:
            result.add_error(PATCH_ERROR_KEY, f"Invalid JsonPatch operation '{operation.op}'.")

    return UserInfoDto.model_validate(document)
