# -*- coding: utf-8 -*-
"""
tests for the mapping of YANG types to JSON schema types
"""
from decimal import Decimal

import pytest

from pyang import types

from yang2openapi import convert_modules
from yang2openapi import types as ytypes
from yang2openapi.definitions import Compilation
from yang2openapi.error import UnsupportedTypeError, LeafrefError
from yang2openapi.names import DefinitionNames

NS = 'urn:example:basic'
REF = '#/components/schemas/'


def xml(name):
    return {'name': name, 'namespace': NS}


class Stmt(object):
    """Minimal stand-in for a pyang statement"""

    def __init__(self, keyword, arg=None, substmts=(), **attrs):
        self.keyword = keyword
        self.arg = arg
        self.substmts = list(substmts)
        self.pos = 'test.yang:1'
        self.i_typedef = None
        self.__dict__.update(attrs)

    def search(self, keyword):
        return [s for s in self.substmts if s.keyword == keyword]

    def search_one(self, keyword, arg=None):
        for s in self.substmts:
            if s.keyword == keyword and (arg is None or s.arg == arg):
                return s
        return None


class LeafrefContext(object):
    """Resolves leafrefs through a dict of id(type):target"""

    def __init__(self, targets):
        self.targets = targets
        self.errors = []

    def leafref_target(self, node, type_):
        return self.targets[id(type_)]


def test_every_builtin_type_has_a_handler():
    mapper = ytypes.TypeMapper()
    assert set(mapper.type_handler) == set(types.yang_type_specs)


def test_unknown_builtin_type_is_fatal():
    leaf = Stmt('leaf', 'x', [Stmt('type', 'float')])
    comp = Compilation(None, LeafrefContext({}), {}, DefinitionNames())
    with pytest.raises(UnsupportedTypeError):
        ytypes.TypeMapper().process_type(comp, leaf.search_one('type'),
                                         leaf, {})


def test_circular_leafref_is_fatal():
    type_a = Stmt('type', 'leafref')
    type_b = Stmt('type', 'leafref')
    a = Stmt('leaf', 'a', [type_a])
    b = Stmt('leaf', 'b', [type_b])
    sctx = LeafrefContext({id(type_a): b, id(type_b): a})
    comp = Compilation(None, sctx, {}, DefinitionNames())
    with pytest.raises(LeafrefError):
        ytypes.TypeMapper().process_type(comp, type_a, a, {})
    assert comp.leafrefs == set()


@pytest.mark.parametrize('value, expected', [
    ('010', True),
    ('-017', True),
    ('0x1F', True),
    ('0', True),
    ('-0', True),
    ('10', False),
    ('-5', False),
])
def test_is_hex_or_octal(value, expected):
    assert ytypes.is_hex_or_octal(value) == expected


def test_default_value_conversion():
    mapper = ytypes.TypeMapper()
    assert mapper.default_value('boolean', 'false') is False
    assert mapper.default_value('decimal64', '2.50') == Decimal('2.50')
    assert mapper.default_value('int16', '-7') == -7
    assert mapper.default_value('uint8', '010') == '010'
    assert mapper.default_value('int8', '-0') == '-0'
    assert mapper.default_value('string', '010') == '010'


def test_string_with_pattern(basic_top):
    assert basic_top['code'] == {
        'description': '', 'default': '000', 'type': 'string',
        'xml': xml('code')}


def test_string_without_pattern(basic_top):
    assert basic_top['name'] == {
        'description': 'Name of the top.', 'default': 'Some name',
        'type': 'string', 'xml': xml('name')}


def test_string_length(basic_top):
    assert basic_top['label'] == {
        'description': '', 'minLength': 2, 'maxLength': 8,
        'default': 'Some label', 'type': 'string', 'xml': xml('label')}


def test_identityref_is_a_bare_ref(basic_top):
    assert basic_top['kind'] == {
        '$ref': REF + 'base-id', 'xml': xml('kind')}


def test_boolean(basic_top):
    assert basic_top['enabled']['type'] == 'boolean'
    assert basic_top['enabled']['default'] is True
    assert basic_top['disabled']['default'] is False


def test_integer_defaults(basic_top):
    assert basic_top['level'] == {
        'description': '', 'format': 'int32', 'default': 50,
        'type': 'integer', 'xml': xml('level')}
    assert basic_top['offset']['default'] == -10
    assert basic_top['offset']['format'] == 'int32'
    assert basic_top['zero'] == {
        'description': '', 'default': '0', 'type': 'string',
        'xml': xml('zero')}
    assert basic_top['counter']['format'] == 'int64'
    assert basic_top['counter']['default'] == 0


def test_uint64(basic_top):
    assert basic_top['big'] == {
        'description': '', 'default': 0, 'type': 'integer',
        'xml': xml('big')}


def test_decimal64(basic_top):
    assert basic_top['ratio'] == {
        'description': '', 'default': Decimal('1.5'), 'type': 'number',
        'xml': xml('ratio')}


def test_enumeration(basic_top):
    assert basic_top['mode'] == {
        'description': '', 'enum': ['fast', 'slow'], 'example': 'fast',
        'default': 'slow', 'type': 'string', 'xml': xml('mode')}


def test_bits(basic_top):
    assert basic_top['flags'] == {
        'description': '', 'minItems': 0, 'uniqueItems': True,
        'enum': ['a', 'b', 'c'], 'default': 'a c', 'type': 'string',
        'xml': xml('flags')}


def test_binary_and_empty(basic_top):
    assert basic_top['data']['format'] == 'byte'
    assert basic_top['data']['type'] == 'string'
    assert basic_top['marker']['type'] == 'object'
    assert 'default' not in basic_top['marker']


@pytest.mark.parametrize('leaf, jtype', [
    ('either', 'string'),
    ('switch', 'boolean'),
    ('mixed', 'string'),
    ('amount', 'number'),
])
def test_union(basic_top, leaf, jtype):
    assert basic_top[leaf]['type'] == jtype
    assert 'default' not in basic_top[leaf]


def test_instance_identifier(basic_top):
    assert basic_top['path']['default'] == '/b:top'
    assert basic_top['path']['type'] == 'string'


def test_leafref_uses_target_type(basic_top):
    assert basic_top['name-ref'] == {
        'description': '', 'default': 'Some name-ref', 'type': 'string',
        'xml': xml('name-ref')}


def test_pattern_without_example_falls_back(load):
    ctx, modules = load('patterns')
    defs = convert_modules(ctx, modules)
    words = defs['patterns_words'].properties
    assert words['consonant']['default'] == 'Some consonant'
    assert [eargs for (_epos, etag, eargs) in ctx.errors
            if etag == 'OPENAPI_PATTERN_EXAMPLE'] == ['[a-z-[aeiou]]']


def test_inverted_patterns_are_ignored(load):
    ctx, modules = load('patterns')
    defs = convert_modules(ctx, modules)
    words = defs['patterns_words'].properties
    assert words['not-a-number']['default'] == 'Some not-a-number'
    assert words['restricted']['default'] == 'a'
