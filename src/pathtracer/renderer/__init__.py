# The controller is imported from pathtracer.renderer.controller directly;
# importing it here would make camera -> renderer -> camera circular.
from pathtracer.renderer.state import RenderState
from pathtracer.renderer.tone_mapping import color_to_bytes, linear_to_gamma

__all__ = ["RenderState", "color_to_bytes", "linear_to_gamma"]
