"""Errors and diagnostics of the YANG to OpenAPI definition compiler"""

from pyang import error

### Exceptions

class CompileError(Exception):
    """Non-recoverable error which aborts the conversion of a module.

    Definitions written before the error was raised are left in the
    definition table."""
    pass

class UnsupportedNodeError(CompileError):
    """raised when a schema node of an unknown kind is walked"""
    def __init__(self, stmt):
        CompileError.__init__(
            self, "%s: unknown schema node kind %s (this should not happen)"
            % (stmt.pos, stmt.keyword))
        self.stmt = stmt

class UnsupportedTypeError(CompileError):
    """raised when a type does not resolve to a known built-in type"""
    def __init__(self, stmt):
        CompileError.__init__(
            self, "%s: cannot map type %s (this should not happen)"
            % (stmt.pos, stmt.arg))
        self.stmt = stmt

class LeafrefError(CompileError):
    """raised when a leafref cannot be followed to its target"""
    def __init__(self, stmt, msg="unresolved leafref"):
        CompileError.__init__(self, "%s: %s in %s" % (stmt.pos, msg, stmt.arg))
        self.stmt = stmt

class DuplicateDefinitionError(CompileError):
    """raised when a definition name is about to be overwritten"""
    def __init__(self, name):
        CompileError.__init__(
            self, "definition %s already exists with different content" % name)
        self.name = name

class PatternError(Exception):
    """used by the pattern synthesizer for expressions it cannot handle"""
    pass

### error codes

## level 4 is a warning, see pyang.error
error_codes = \
    {
    'OPENAPI_PATTERN_EXAMPLE':
      (4,
       'cannot create an example string for pattern "%s"'),
    }

for tag, (level, fmt) in error_codes.items():
    error.add_error_code(tag, level, fmt)

def err_add(errors, pos, tag, args):
    """Report a diagnostic in the pyang error list, if there is a position
    to report it at."""
    if pos is not None:
        error.err_add(errors, pos, tag, args)
