"""JSON schema definitions as they appear in an OpenAPI document"""

COMPONENTS_PREFIX = "#/components/schemas/"
"""Prefix of `$ref` values pointing at a definition."""

CONFIG = "_config"
TOP = "_TOP"
MODULE_NAME_SUFFIX = "_module"
INPUT = "input"
INPUT_SUFFIX = "_input"
OUTPUT = "output"
OUTPUT_SUFFIX = "_output"

OBJECT_TYPE = "object"
ARRAY_TYPE = "array"
STRING_TYPE = "string"
NUMBER_TYPE = "number"
INTEGER_TYPE = "integer"
BOOLEAN_TYPE = "boolean"

class Schema(object):
    """A named definition.

    Attributes that are None are left out of the serialized form.
    `properties` maps property names to JSON-able dicts.
    """

    keys = ("title", "type", "properties", "required", "description",
            "enum", "default", "example", "format", "items", "ref", "xml")
    """Serialization order of the attributes."""

    def __init__(self, title=None, type=None, properties=None, required=None,
                 description=None, enum=None, default=None, example=None,
                 format=None, items=None, ref=None, xml=None):
        self.title = title
        self.type = type
        self.properties = properties
        self.required = required
        self.description = description
        self.enum = enum
        self.default = default
        self.example = example
        self.format = format
        self.items = items
        self.ref = ref
        self.xml = xml

    def to_dict(self):
        res = {}
        for key in self.keys:
            val = getattr(self, key)
            if val is None:
                continue
            if key == "ref":
                key = "$ref"
            res[key] = val
        return res

    def __eq__(self, other):
        return isinstance(other, Schema) and self.to_dict() == other.to_dict()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return "Schema(%r)" % self.to_dict()

def to_json(definitions):
    """Return the JSON-able form of a definition table."""
    return dict((name, schema.to_dict())
                for (name, schema) in definitions.items())
