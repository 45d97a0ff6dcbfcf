"""The view of a validated pyang context the compiler works with"""

import logging

from .error import LeafrefError

log = logging.getLogger(__name__)

class SchemaContext(object):
    """Resolves identities, leafrefs and module membership.

    `ctx` is a pyang Context in which all modules have been validated.
    """

    def __init__(self, ctx):
        self.ctx = ctx
        self._derived = None
        """dict of id(identity):[derived identity]"""

    @property
    def errors(self):
        return self.ctx.errors

    def modules(self):
        """Return the main modules in the context, sorted by name."""
        res = []
        seen = set()
        for m in self.ctx.modules.values():
            if m is None or m.keyword != "module" or id(m) in seen:
                continue
            seen.add(id(m))
            res.append(m)
        res.sort(key=lambda m: m.arg)
        return res

    def derived_identities(self, identity):
        """Return the identities which have `identity` as a direct base."""
        if self._derived is None:
            self._derived = self._index_identities()
        return self._derived.get(id(identity), [])

    def _index_identities(self):
        res = {}
        for m in self.modules():
            for i in m.i_identities.values():
                for b in i.search("base"):
                    base = getattr(b, "i_identity", None)
                    if base is not None:
                        res.setdefault(id(base), []).append(i)
        log.debug("indexed derived identities of %d identities", len(res))
        return res

    def leafref_target(self, node, type_):
        """Return the leaf or leaf-list the leafref `type_` of `node`
        points at."""
        ptr = getattr(node, "i_leafref_ptr", None)
        if ptr is not None and type_ is node.search_one("type"):
            return ptr[0]
        target = getattr(type_.i_type_spec, "i_target_node", None)
        if target is None:
            raise LeafrefError(type_)
        return target

    def find_module(self, node):
        return node.main_module()

    def module_by_namespace(self, uri):
        for m in self.modules():
            ns = m.search_one("namespace")
            if ns is not None and ns.arg == uri:
                return m
        return None

    def namespace(self, node):
        return self.find_module(node).search_one("namespace").arg

    def prefix(self, module):
        return module.search_one("prefix").arg
