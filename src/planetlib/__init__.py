"""Planet catalog crawling, enrichment and derived views."""
