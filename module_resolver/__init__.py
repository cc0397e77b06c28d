from module_resolver.resolution import map_module, resolve

__all__ = ["map_module", "resolve"]
