"""munin_probes.crawler: fetching a page and the resources it embeds."""
