"""mtojson: bounded JSON generation into fixed-capacity buffers."""

from .config import RenderConfig, MtojsonConfig, load_config
from .errors import MtojsonError, NestingTooDeep, TreeError, TreeLoadError
from .generator import dumps, generate_json, required_size
from .loader import load_tree, load_tree_file
from .model import (
    Entry,
    JsonArray,
    JsonObject,
    Raw,
    RefSequence,
    ScalarBlock,
    TypeTag,
)
from .writer import BoundedWriter

__all__ = [
    "generate_json",
    "required_size",
    "dumps",
    "Entry",
    "JsonArray",
    "JsonObject",
    "Raw",
    "RefSequence",
    "ScalarBlock",
    "TypeTag",
    "BoundedWriter",
    "load_tree",
    "load_tree_file",
    "RenderConfig",
    "MtojsonConfig",
    "load_config",
    "MtojsonError",
    "NestingTooDeep",
    "TreeError",
    "TreeLoadError",
]
