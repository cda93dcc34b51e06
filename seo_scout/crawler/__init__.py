"""seo_scout.crawler: обход сайта, robots.txt, извлечение ссылок и модели страниц."""
