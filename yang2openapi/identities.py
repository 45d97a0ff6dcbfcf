"""Identity definitions

An identity becomes a string definition enumerating its own name and,
depth first, the names of all identities derived from it.
"""

import logging

from . import schema
from . import util

log = logging.getLogger(__name__)

def build_identity_schema(sctx, identity):
    log.debug("processing identity %s", identity.arg)
    enum = [identity.arg]
    add_derived(sctx, identity, enum, set([id(identity)]))
    return schema.Schema(title=identity.arg,
                         description=util.description(identity),
                         enum=enum,
                         type=schema.STRING_TYPE)

def add_derived(sctx, identity, enum, seen):
    for derived in sctx.derived_identities(identity):
        # pyang reports circular bases, but do not loop on them
        if id(derived) in seen:
            continue
        seen.add(id(derived))
        enum.append(derived.arg)
        add_derived(sctx, derived, enum, seen)

def identity_definition(comp, identity):
    """Return the name of the definition of `identity`.

    The definition is written to the compilation's table unless it is
    already there.  An identity from another module which got its name
    in an earlier compilation is copied under that name, so that the
    table never refers to definitions it does not hold.
    """
    if comp.names.is_assigned(identity):
        name = comp.names.get_name(identity)
        if name in comp.definitions:
            return name
    else:
        name = comp.names.assign_name(identity, [identity.arg])
    comp.put(name, build_identity_schema(comp.sctx, identity))
    return name
