# marc_toolkit/core/types/json.py

"""JSON type definitions for reports and configuration documents."""

# Use JSONDict when the value is known to be an object with string keys,
# JSONList for arrays, and JSONType for nested values of either kind.

type JSONPrimitive = str | int | float | bool | None

type JSONType = JSONDict | JSONList | JSONPrimitive
type JSONDict = dict[str, JSONType]
type JSONList = list[JSONType]

__all__ = ["JSONPrimitive", "JSONType", "JSONDict", "JSONList"]
