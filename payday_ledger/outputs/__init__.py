# payday_ledger/outputs/__init__.py
"""Transaction export formats, looked up by name in ``config['output_modules']``."""
from importlib import import_module


def get_output(name, config):
    modules = config.get('output_modules', {})
    if name not in modules:
        known = ', '.join(sorted(modules)) or 'none'
        raise ValueError(f"Unknown output format '{name}' (configured: {known})")
    module_name, cls_name = modules[name].rsplit('.', 1)
    return getattr(import_module(module_name), cls_name)(config)
