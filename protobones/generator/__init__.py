"""Example value synthesis and stub rendering for protobuf RPC methods."""

from .generate import GenerationReport as GenerationReport
from .generate import generate as generate
from .generate import method_stub as method_stub
from .loader import load_descriptor_set as load_descriptor_set
from .options import RenderOptions as RenderOptions
from .renderer import render as render
from .shapes import CallShape as CallShape
from .shapes import resolve_shape as resolve_shape
from .synthesizer import Synthesizer as Synthesizer
from .synthesizer import synthesize as synthesize
from .types import *
from .values import *
