"""Conversion of YANG modules to named JSON schema definitions

Every container and list gets a definition holding its children, and a
"top" definition with the container or list as its only property.  The
definitions of configuration data are generated separately from those
of all data, and rpc and action input and output get definitions of
their own.  Identities become string enumerations.

All state of one conversion is kept in a `Compilation`.  Modules which
go into one document are converted in turn with the same definition
table and name registry.
"""

import logging

from . import identities
from . import schema
from . import util
from .context import SchemaContext
from .error import DuplicateDefinitionError, UnsupportedNodeError
from .names import DefinitionNames
from .schema import CONFIG, TOP, MODULE_NAME_SUFFIX
from .types import TypeMapper

log = logging.getLogger(__name__)

skip_keywords = ("action", "notification", "rpc", "input", "output")
"""Children that are not part of the data tree."""

class Compilation(object):
    """State of the conversion of one module."""

    def __init__(self, module, sctx, definitions, names):
        self.module = module
        self.sctx = sctx
        self.definitions = definitions
        """dict of name:Schema"""
        self.names = names
        """the DefinitionNames registry"""
        self.leafrefs = set()
        """ids of leafs being resolved, to detect circular leafrefs"""

    def put(self, name, definition):
        old = self.definitions.get(name)
        if old is not None and old != definition:
            raise DuplicateDefinitionError(name)
        self.definitions[name] = definition

class DefinitionGenerator(object):

    def __init__(self, components_prefix=schema.COMPONENTS_PREFIX):
        self.components_prefix = components_prefix
        self.type_mapper = TypeMapper(components_prefix)
        self.node_handler = {
            "anydata": self.anydata,
            "anyxml": self.anydata,
            "choice": self.choice,
            "container": self.container,
            "leaf": self.leaf,
            "leaf-list": self.leaf_list,
            "list": self.container,
            }

    def convert_to_schemas(self, module, sctx, definitions=None, names=None,
                           single_module=False):
        """Add the definitions of `module` to `definitions`.

        `definitions` and `names` are created if not given; pass the
        ones used for other modules to put several modules into one
        document.  With `single_module`, a definition wrapping the
        whole module is added.  Return the definition table.
        """
        if definitions is None:
            definitions = {}
        if names is None:
            names = DefinitionNames()
        if single_module:
            names.add_unlinked_name(module.arg + MODULE_NAME_SUFFIX)
        comp = Compilation(module, sctx, definitions, names)
        log.debug("converting module %s", module.arg)
        self.process_identities(comp)
        self.process_containers_and_lists(comp)
        self.process_rpcs(comp)
        if single_module:
            self.process_module(comp)
        return definitions

    def process_identities(self, comp):
        ids = list(comp.module.i_identities.values())
        log.debug("module %s has %d identities", comp.module.arg, len(ids))
        for identity in ids:
            identities.identity_definition(comp, identity)

    def process_containers_and_lists(self, comp):
        module_name = comp.module.arg
        for node in comp.module.i_children:
            if node.keyword not in ("container", "list"):
                continue
            if util.is_config(node):
                self.data_node_container(comp, node, module_name, True)
            self.data_node_container(comp, node, module_name, False)
            self.process_actions(comp, node, module_name)

    def process_actions(self, comp, node, parent_name):
        for ch in node.i_children:
            if ch.keyword == "action":
                self.process_operation(comp, ch, parent_name)

    def process_rpcs(self, comp):
        for ch in comp.module.i_children:
            if ch.keyword == "rpc":
                self.process_operation(comp, ch, comp.module.arg)

    def process_operation(self, comp, op, parent_name):
        for keyword in (schema.INPUT, schema.OUTPUT):
            for ch in op.i_children:
                if ch.keyword == keyword:
                    self.process_input_output(comp, ch, op.arg, parent_name)
                    break

    def process_input_output(self, comp, io, op_name, parent_name):
        if not io.i_children:
            return
        if io.keyword == schema.INPUT:
            suffix = schema.INPUT_SUFFIX
        else:
            suffix = schema.OUTPUT_SUFFIX
        filename = parent_name + "_" + op_name + suffix
        definition = schema.Schema(title=filename, type=schema.OBJECT_TYPE,
                                   xml={"name": io.keyword})
        self.process_children(comp, definition, io.i_children, parent_name,
                              False)
        discriminator = comp.names.pick_discriminator(
            io, [filename, filename + TOP])
        comp.put(filename + discriminator, definition)
        self.process_top_data(comp, filename, discriminator, io)

    def data_node_container(self, comp, node, parent_name, is_config):
        """Write the definitions of the container or list `node`.

        Return the property which refers to the definition."""
        local_name = node.arg
        if is_config:
            node_name = parent_name + CONFIG + "_" + local_name
        else:
            node_name = parent_name + "_" + local_name
        definition = schema.Schema(type=schema.OBJECT_TYPE, title=node_name,
                                   description=util.description(node))
        self.process_children(comp, definition, node.i_children,
                              parent_name + "_" + local_name, is_config)
        config_name = parent_name + CONFIG + "_" + local_name
        name = parent_name + "_" + local_name
        discriminator = comp.names.pick_discriminator(
            node, [config_name, config_name + TOP, name, name + TOP])
        definition.xml = util.xml_param(comp.sctx, node)
        comp.put(node_name + discriminator, definition)
        return self.process_top_data(comp, node_name, discriminator, node)

    def process_top_data(self, comp, filename, discriminator, node):
        ref = self.components_prefix + filename + discriminator
        top_name = filename + TOP
        if node.keyword == "list":
            prop = {"type": schema.ARRAY_TYPE,
                    "items": {"$ref": ref},
                    "description": util.description(node)}
        else:
            # nothing is allowed beside $ref
            prop = {"$ref": ref}
        if node.keyword in (schema.INPUT, schema.OUTPUT):
            prop_name = node.keyword
        else:
            prop_name = node.arg
        top = schema.Schema(type=schema.OBJECT_TYPE,
                            properties={prop_name: prop},
                            title=top_name)
        comp.put(top_name + discriminator, top)
        return prop

    def process_children(self, comp, definition, nodes, parent_name,
                         is_config):
        properties = {}
        required = []
        for node in nodes:
            if is_config and not util.is_config(node):
                continue
            self.process_child_node(comp, node, parent_name, is_config,
                                    properties, required)
        definition.properties = properties
        definition.required = required or None
        return properties

    def process_child_node(self, comp, node, parent_name, is_config,
                           properties, required):
        if node.keyword in skip_keywords:
            return
        try:
            handler = self.node_handler[node.keyword]
        except KeyError:
            raise UnsupportedNodeError(node)
        handler(comp, node, parent_name, is_config, properties, required)

    def container(self, comp, node, parent_name, is_config, properties,
                  required):
        if util.is_mandatory(node):
            required.append(node.arg)
        properties[node.arg] = self.data_node_container(comp, node,
                                                        parent_name, is_config)
        if not is_config:
            self.process_actions(comp, node, parent_name)

    def leaf(self, comp, node, parent_name, is_config, properties, required):
        prop = {"description": util.description(node)}
        self.type_mapper.process_type(comp, node.search_one("type"), node,
                                      prop)
        if "$ref" in prop:
            del prop["description"]
        properties[node.arg] = prop
        prop["xml"] = util.xml_param(comp.sctx, node)
        if util.is_mandatory(node):
            required.append(node.arg)

    def leaf_list(self, comp, node, parent_name, is_config, properties,
                  required):
        if util.is_mandatory(node):
            required.append(node.arg)
        prop = {"type": schema.ARRAY_TYPE}
        min_elements = node.search_one("min-elements")
        if min_elements is not None:
            prop["minItems"] = int(min_elements.arg)
        max_elements = node.search_one("max-elements")
        if max_elements is not None and max_elements.arg != "unbounded":
            prop["maxItems"] = int(max_elements.arg)
        items = {}
        self.type_mapper.process_type(comp, node.search_one("type"), node,
                                      items)
        prop["items"] = items
        prop["description"] = util.description(node)
        properties[node.arg] = prop

    def anydata(self, comp, node, parent_name, is_config, properties,
                required):
        properties[node.arg] = {
            "description": util.description(node),
            "default": "<%s> ... </%s>" % (node.arg, node.arg),
            "type": schema.STRING_TYPE,
            "xml": util.xml_param(comp.sctx, node),
            }
        if util.is_mandatory(node):
            required.append(node.arg)

    def choice(self, comp, node, parent_name, is_config, properties,
               required):
        """Only the default case, or the first case, is represented.

        In the config view the children of the case are filtered by
        their own config flag, like the children of a container.
        """
        cases = [ch for ch in node.i_children if ch.keyword == "case"]
        if not cases:
            return
        case = cases[0]
        default = node.search_one("default")
        if default is not None:
            for c in cases:
                if c.arg == default.arg:
                    case = c
                    break
        for ch in case.i_children:
            if is_config and not util.is_config(ch):
                continue
            self.process_child_node(comp, ch, parent_name, is_config,
                                    properties, required)

    def process_module(self, comp):
        """Write the definition wrapping the configuration data of the
        module."""
        module = comp.module
        name = module.arg + MODULE_NAME_SUFFIX
        properties = {}
        required = []
        for node in module.i_children:
            if not util.is_config(node):
                continue
            if node.keyword in ("container", "list"):
                if util.is_mandatory(node):
                    required.append(node.arg)
                ref = self.components_prefix + module.arg + CONFIG + "_" + \
                      node.arg + comp.names.get_discriminator(node)
                if node.keyword == "list":
                    prop = {"type": schema.ARRAY_TYPE,
                            "items": {"$ref": ref},
                            "description": util.description(node),
                            "title": node.arg + CONFIG}
                else:
                    prop = {"$ref": ref}
                properties[node.arg] = prop
            elif node.keyword == "leaf":
                self.leaf(comp, node, module.arg, True, properties, required)
        comp.put(name, schema.Schema(title=name,
                                     type=schema.OBJECT_TYPE,
                                     properties=properties,
                                     description=util.description(module),
                                     required=required or None))

def convert_modules(ctx, modules, single_module=False, definitions=None,
                    names=None, components_prefix=schema.COMPONENTS_PREFIX):
    """Convert `modules` into one definition table and return it.

    `ctx` is the pyang Context the modules were validated in.
    """
    sctx = SchemaContext(ctx)
    if definitions is None:
        definitions = {}
    if names is None:
        names = DefinitionNames()
    if single_module:
        for m in modules:
            names.add_unlinked_name(m.arg + MODULE_NAME_SUFFIX)
    generator = DefinitionGenerator(components_prefix)
    for m in modules:
        generator.convert_to_schemas(m, sctx, definitions, names,
                                     single_module)
    return definitions
