"""Google Scholar citation meta tags for journal and preprint landing pages."""
