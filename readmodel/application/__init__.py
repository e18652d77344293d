"""Application assembly and the query dispatch engine.

This package contains the machinery that turns an untyped request into a
page of records: the query type and document type registries, the
polymorphic decoder, the ordering compiler, the handler registry and
dispatcher, and the application that ties them together.
"""

from .application import Application, ApplicationBuilder
from .contracts import ReadModelRequest, ReadModelResponse
from .decoding import PolymorphicQueryDecoder, QueryParams, sniff_value
from .discovery import ClassScanner, ModuleScanner
from .handlers import HandlerRegistry, QueryDispatcher, QueryHandler
from .ordering import OrderingCompiler, compile_order_by
from .registry import DocumentTypeResolver, FieldSpec, QueryTypeRegistry, ShapeDescriptor

__all__ = [
    # Application
    "Application",
    "ApplicationBuilder",
    "ReadModelRequest",
    "ReadModelResponse",
    # Registries
    "DocumentTypeResolver",
    "FieldSpec",
    "QueryTypeRegistry",
    "ShapeDescriptor",
    # Decoding
    "PolymorphicQueryDecoder",
    "QueryParams",
    "sniff_value",
    # Ordering
    "OrderingCompiler",
    "compile_order_by",
    # Dispatch
    "HandlerRegistry",
    "QueryDispatcher",
    "QueryHandler",
    # Discovery
    "ClassScanner",
    "ModuleScanner",
]
