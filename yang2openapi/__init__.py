"""Compiler from YANG modules to OpenAPI JSON schema definitions"""

from .context import SchemaContext
from .definitions import DefinitionGenerator, Compilation, convert_modules
from .names import DefinitionNames
from .pattern import example_for
from .schema import Schema, to_json

__version__ = '0.1.0'
__date__ = '2026-10-17'
