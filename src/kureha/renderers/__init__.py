"""Kureha renderers.

Renderers convert typed parse trees into source text.

Available Renderers:
- RubyRenderer: Renders a Ruby parse tree to minimal Ruby source using
  RenderBuffer

Thread Safety:
All renderers use a RenderBuffer local to each render() call.
Safe for concurrent use from multiple threads.

"""

from kureha.renderers.protocol import SourceRenderer
from kureha.renderers.ruby import RenderContext, RubyRenderer

__all__ = ["RenderContext", "RubyRenderer", "SourceRenderer"]
