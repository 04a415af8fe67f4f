"""Media assembly: concatenate the clips a combination selects."""

from .batch import BatchRunner, RenderJob
from .ffmpeg import AssemblyError, FFmpegAssembler, FFmpegConfig

__all__ = ["AssemblyError", "BatchRunner", "FFmpegAssembler", "FFmpegConfig", "RenderJob"]
