"""Helpers for looking at validated pyang statements"""

def description(stmt):
    d = stmt.search_one("description")
    if d is None:
        return ""
    return d.arg

def is_config(node):
    """Return True if `node` is configuration data.

    Nodes below rpc, action and notification have no config property.
    """
    return getattr(node, "i_config", None) == True

def is_mandatory(node):
    """Return True if `node` has to be present in its parent.

    A container is mandatory if it has no presence statement and one
    of its children has a "mandatory true" statement.  A list or
    leaf-list is mandatory if its min-elements is greater than zero.
    """
    if node.keyword == "container":
        if node.search_one("presence") is not None:
            return False
        for ch in node.i_children:
            if ch.search_one("mandatory", "true") is not None:
                return True
        return False
    elif node.keyword in ("list", "leaf-list"):
        m = node.search_one("min-elements")
        return m is not None and int(m.arg) > 0
    return node.search_one("mandatory", "true") is not None

def type_chain(type_):
    """Return the chain of types `type_` is derived from.

    The built-in type comes first and `type_` itself is last.
    """
    chain = [type_]
    typedef = getattr(type_, "i_typedef", None)
    while typedef is not None:
        type_ = typedef.search_one("type")
        if type_ is None or type_ in chain:
            break
        chain.insert(0, type_)
        typedef = getattr(type_, "i_typedef", None)
    return chain

def base_type_name(type_):
    return type_chain(type_)[0].arg

def search_restriction(tchain, keyword):
    """Return the substatements `keyword` of the most derived type in
    `tchain` that has any."""
    for t in reversed(tchain):
        res = t.search(keyword)
        if res:
            return res
    return []

def get_ranges(tchain, kw):
    """Return the list of `kw` ranges ("range" or "length") in effect for
    `tchain`, as (lo, hi) string pairs, or None if there are no such
    restrictions."""
    ran = None
    for t in tchain:
        rstmt = t.search_one(kw)
        if rstmt is None:
            continue
        ran = [[p.strip() for p in i.split("..")] for i in rstmt.arg.split("|")]
    if ran is None:
        return None
    return [(r[0], r[-1]) for r in ran]

def declared_default(node, tchain):
    """Return the default value text of `node`, declared on the node
    itself or on one of the typedefs in `tchain`."""
    if node is not None and node.keyword == "leaf":
        d = node.search_one("default")
        if d is not None:
            return d.arg
    for t in reversed(tchain):
        typedef = getattr(t, "i_typedef", None)
        if typedef is not None:
            d = typedef.search_one("default")
            if d is not None:
                return d.arg
    return None

def xml_param(sctx, node):
    return {"name": node.arg, "namespace": sctx.namespace(node)}
