from pathtracer.camera.camera import Camera, RenderOptions

__all__ = ["Camera", "RenderOptions"]
