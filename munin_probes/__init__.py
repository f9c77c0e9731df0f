# munin_probes/__init__.py
"""
munin_probes package initializer.
Defines package version; the plugin commands live in munin_probes.cli.
"""
__version__ = "0.1.0"
