"""OpenAPI output plugin

Compiles the YANG modules to JSON schema definitions and writes them as
the "components" object of an OpenAPI document.
"""

import json
import optparse
from decimal import Decimal

from pyang import plugin
from pyang import error

from yang2openapi import definitions
from yang2openapi import schema
from yang2openapi.error import CompileError

def pyang_plugin_init():
    plugin.register_plugin(OpenApiPlugin())

class OpenApiPlugin(plugin.PyangPlugin):
    def add_output_format(self, fmts):
        self.multiple_modules = True
        fmts['openapi'] = self

    def add_opts(self, optparser):
        optlist = [
            optparse.make_option("--openapi-module-wrapper",
                                 dest="openapi_module_wrapper",
                                 action="store_true",
                                 help="""Add a definition wrapping the
                                       configuration data of each module"""),
            optparse.make_option("--openapi-components-prefix",
                                 dest="openapi_components_prefix",
                                 default=schema.COMPONENTS_PREFIX,
                                 help="Prefix of $ref values (default %s)"
                                 % schema.COMPONENTS_PREFIX),
            ]
        g = optparser.add_option_group("OpenAPI output specific options")
        g.add_options(optlist)

    def setup_fmt(self, ctx):
        ctx.implicit_errors = False

    def emit(self, ctx, modules, fd):
        if 'submodule' in [m.keyword for m in modules]:
            raise error.EmitError("Cannot translate submodules")
        for (epos, etag, eargs) in ctx.errors:
            if error.is_error(error.err_level(etag)):
                raise error.EmitError("OpenAPI translation needs valid modules")
        emit_openapi(ctx, modules, fd)

def emit_openapi(ctx, modules, fd):
    try:
        defs = definitions.convert_modules(
            ctx, modules,
            single_module=ctx.opts.openapi_module_wrapper,
            components_prefix=ctx.opts.openapi_components_prefix)
    except CompileError as ex:
        raise error.EmitError(str(ex))
    doc = {"components": {"schemas": schema.to_json(defs)}}
    write_json(doc, fd)
    fd.write("\n")

def write_json(obj, fd, indent=2, level=0):
    """Write `obj` as indented JSON.

    Decimal values are written exactly, as JSON numbers.
    """
    if isinstance(obj, dict):
        items = list(obj.items())
        start, end = "{", "}"
    elif isinstance(obj, (list, tuple)):
        items = list(obj)
        start, end = "[", "]"
    else:
        fd.write(json_value(obj))
        return
    if not items:
        fd.write(start + end)
        return
    pad = "\n" + " " * (indent * (level + 1))
    fd.write(start)
    for i, item in enumerate(items):
        if i > 0:
            fd.write(",")
        fd.write(pad)
        if isinstance(obj, dict):
            (key, item) = item
            fd.write(json.dumps(str(key)) + ": ")
        write_json(item, fd, indent, level + 1)
    fd.write("\n" + " " * (indent * level) + end)

def json_value(obj):
    if isinstance(obj, Decimal):
        if obj == obj.to_integral_value():
            return str(int(obj))
        return format(obj, "f")
    return json.dumps(obj)
