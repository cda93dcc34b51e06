"""seo_scout.parser: разбор HTML-страниц и sitemap.xml."""
