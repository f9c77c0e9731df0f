"""munin_probes.parser: HTML link discovery."""
