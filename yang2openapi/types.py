"""Mapping of YANG types to JSON schema types

The built-in type a type statement is derived from selects the handler.
A handler fills in the property dict and returns the JSON type.
"""

from decimal import Decimal

from pyang import types

from . import identities
from . import pattern
from . import schema
from . import util
from .error import UnsupportedTypeError, LeafrefError, err_add

INT32_FORMAT = "int32"
INT64_FORMAT = "int64"

int_formats = {
    "int8": INT32_FORMAT,
    "int16": INT32_FORMAT,
    "int32": INT32_FORMAT,
    "uint8": INT32_FORMAT,
    "uint16": INT32_FORMAT,
    "uint32": INT64_FORMAT,
    "int64": INT64_FORMAT,
    }

string_like = ("string", "bits", "binary", "identityref", "enumeration",
               "leafref", "union")
"""Union member types which make the union a string."""

numeric = ("int8", "int16", "int32", "int64", "uint8", "uint16", "uint32",
           "uint64", "decimal64")

def is_hex_or_octal(value):
    """Return True if the integer literal `value` starts with "0" or
    "-0", in which case it is kept as a string."""
    return value.startswith("0") or value.startswith("-0")

def decimal64_min(tchain):
    fd = int(tchain[0].search_one("fraction-digits").arg)
    return Decimal(-9223372036854775808).scaleb(-fd)

class TypeMapper(object):

    def __init__(self, components_prefix=schema.COMPONENTS_PREFIX):
        self.components_prefix = components_prefix
        self.type_handler = {
            "binary": self.binary_type,
            "bits": self.bits_type,
            "boolean": self.boolean_type,
            "decimal64": self.numeric_type,
            "empty": self.empty_type,
            "enumeration": self.enumeration_type,
            "identityref": self.identityref_type,
            "instance-identifier": self.instance_identifier_type,
            "int8": self.numeric_type,
            "int16": self.numeric_type,
            "int32": self.numeric_type,
            "int64": self.numeric_type,
            "leafref": self.leafref_type,
            "string": self.string_type,
            "uint8": self.numeric_type,
            "uint16": self.numeric_type,
            "uint32": self.numeric_type,
            "uint64": self.numeric_type,
            "union": self.union_type,
            }

    def process_type(self, comp, type_, node, prop, holder=None):
        """Describe the values of `type_` in the property dict `prop`.

        `node` is the leaf or leaf-list being converted.  `holder` is
        the statement whose default applies; it differs from `node` when
        a leafref has been followed.  Return the JSON type.
        """
        if holder is None:
            holder = node
        tchain = util.type_chain(type_)
        typ = tchain[0].arg
        try:
            handler = self.type_handler[typ]
        except KeyError:
            raise UnsupportedTypeError(type_)
        jtype = handler(comp, tchain, node, prop)
        if typ in ("identityref", "leafref"):
            return jtype
        default = util.declared_default(holder, tchain)
        if default is not None:
            if typ in int_formats and is_hex_or_octal(default):
                # keep the literal, its base would be lost as a number
                jtype = schema.STRING_TYPE
                prop.pop("format", None)
            prop["default"] = self.default_value(typ, default)
        prop["type"] = jtype
        return jtype

    def default_value(self, typ, default):
        if typ == "boolean":
            return default == "true"
        elif typ in ("decimal64", "uint64"):
            return Decimal(default)
        elif typ in int_formats:
            if is_hex_or_octal(default):
                return default
            return int(default)
        return default

    def binary_type(self, comp, tchain, node, prop):
        prop["format"] = "byte"
        return schema.STRING_TYPE

    def bits_type(self, comp, tchain, node, prop):
        prop["minItems"] = 0
        prop["uniqueItems"] = True
        names = [b.arg for b in util.search_restriction(tchain, "bit")]
        prop["enum"] = names
        if names:
            prop["default"] = names[0] + " " + names[-1]
        return schema.STRING_TYPE

    def boolean_type(self, comp, tchain, node, prop):
        prop["default"] = True
        return schema.BOOLEAN_TYPE

    def empty_type(self, comp, tchain, node, prop):
        return schema.OBJECT_TYPE

    def enumeration_type(self, comp, tchain, node, prop):
        names = [e.arg for e in util.search_restriction(tchain, "enum")]
        prop["enum"] = names
        if names:
            prop["example"] = names[0]
        return schema.STRING_TYPE

    def identityref_type(self, comp, tchain, node, prop):
        base = tchain[0].search_one("base")
        identity = getattr(base, "i_identity", None)
        if identity is None:
            raise UnsupportedTypeError(tchain[-1])
        name = identities.identity_definition(comp, identity)
        prop["$ref"] = self.components_prefix + name
        return schema.STRING_TYPE

    def instance_identifier_type(self, comp, tchain, node, prop):
        module = comp.sctx.find_module(node)
        for ch in module.i_children:
            if ch.keyword == "container":
                prop["default"] = "/%s:%s" % (comp.sctx.prefix(module), ch.arg)
                break
        return schema.STRING_TYPE

    def leafref_type(self, comp, tchain, node, prop):
        type_ = tchain[-1]
        target = comp.sctx.leafref_target(node, type_)
        if id(target) in comp.leafrefs:
            raise LeafrefError(type_, "circular leafref")
        comp.leafrefs.add(id(target))
        try:
            return self.process_type(comp, target.search_one("type"), node,
                                     prop, holder=target)
        finally:
            comp.leafrefs.discard(id(target))

    def numeric_type(self, comp, tchain, node, prop):
        typ = tchain[0].arg
        if typ == "uint64":
            prop["default"] = 0
            return schema.INTEGER_TYPE
        ranges = util.get_ranges(tchain, "range")
        lo = "min"
        if ranges:
            lo = ranges[0][0]
        if typ == "decimal64":
            if lo == "min":
                prop["default"] = decimal64_min(tchain)
            else:
                prop["default"] = Decimal(lo)
            return schema.NUMBER_TYPE
        prop["format"] = int_formats[typ]
        if lo == "min":
            prop["default"] = types.yang_type_specs[typ].min
        else:
            prop["default"] = int(lo)
        return schema.INTEGER_TYPE

    def string_type(self, comp, tchain, node, prop):
        ranges = util.get_ranges(tchain, "length")
        if ranges:
            (lo, hi) = (ranges[0][0], ranges[-1][1])
            prop["minLength"] = 0 if lo == "min" else int(lo)
            if hi != "max":
                prop["maxLength"] = int(hi)
        patterns = [p for t in tchain for p in t.search("pattern")
                    if p.search_one("modifier", "invert-match") is None]
        if patterns:
            example = pattern.example_for(patterns[0].arg)
            if example is not None:
                prop["default"] = example
                return schema.STRING_TYPE
            err_add(comp.sctx.errors, patterns[0].pos,
                    "OPENAPI_PATTERN_EXAMPLE", patterns[0].arg)
        prop["default"] = "Some " + node.arg
        return schema.STRING_TYPE

    def union_type(self, comp, tchain, node, prop):
        is_string = is_number = is_boolean = False
        for member in tchain[0].search("type"):
            typ = util.base_type_name(member)
            if typ in string_like:
                is_string = True
                break
            elif typ in numeric:
                is_number = True
            elif typ == "boolean":
                is_boolean = True
        if is_string:
            return schema.STRING_TYPE
        if is_boolean:
            if is_number:
                return schema.STRING_TYPE
            return schema.BOOLEAN_TYPE
        return schema.NUMBER_TYPE
