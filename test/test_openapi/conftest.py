# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name
"""
fixtures for the OpenAPI definition tests
"""
import io
import os

import pytest

from pyang import error
from pyang.context import Context
from pyang.repository import FileRepository

from yang2openapi import convert_modules

YANG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'yang')

DEFAULT_OPTIONS = {
    'format': 'openapi',
    'verbose': False,
    'list_errors': True,
    'print_error_code': True,
    'features': [],
    'deviations': [],
    'path': [],
    'no_path_recurse': True,
    'openapi_module_wrapper': False,
}
"""Default options for pyang command line"""


class objectify(object):
    """Utility for providing object access syntax (.attr) to dicts"""

    def __init__(self, *args, **kwargs):
        for entry in args:
            self.__dict__.update(entry)

        self.__dict__.update(kwargs)

    def __getattr__(self, _):
        return None

    def __setattr__(self, attr, value):
        self.__dict__[attr] = value


def create_context(path=YANG_DIR, *options, **kwargs):
    """Generates a pyang context

    Arguments:
        path (str): location of YANG modules.
        *options: list of dicts, with options to be passed to context.
        **kwargs: similar to ``options`` but have a higher precedence.

    Returns:
        pyang.Context: Context object for ``pyang`` usage
    """

    opts = objectify(DEFAULT_OPTIONS, *options, **kwargs)
    repo = FileRepository(path, use_env=False,
                          no_path_recurse=opts.no_path_recurse)
    ctx = Context(repo)
    ctx.opts = opts

    return ctx


def load_modules(*names, **kwargs):
    """Parse and validate the fixture modules `names`.

    Returns:
        (ctx, modules): the context and the modules in `names` order
    """
    ctx = create_context(**kwargs)
    modules = []
    for name in names:
        filename = os.path.join(YANG_DIR, name + '.yang')
        with io.open(filename, encoding='utf-8') as fd:
            text = fd.read()
        module = ctx.add_module(filename, text)
        assert module is not None, name
        modules.append(module)
    ctx.validate()
    errors = [(str(epos), etag) for (epos, etag, _eargs) in ctx.errors
              if error.is_error(error.err_level(etag))]
    assert errors == []
    return ctx, modules


@pytest.fixture
def load():
    return load_modules


@pytest.fixture(scope='module')
def basic():
    """basic.yang compiled on its own, with the module wrapper"""
    ctx, modules = load_modules('basic')
    return convert_modules(ctx, modules, single_module=True)


@pytest.fixture(scope='module')
def basic_top(basic):
    """properties of the full view of the top container"""
    return basic['basic_top'].properties
