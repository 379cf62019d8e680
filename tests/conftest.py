import pytest

from scraper import parse_page

PAGE_URL = "https://example.com/blog/post"

SAMPLE_HTML = """<!doctype html>
<html>
<head>
  <title> Gardening for Beginners </title>
  <meta name="description" content="Simple gardening tips for new growers.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://example.com/blog/post">
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Article"}</script>
</head>
<body>
  <header><nav><a href="/home">Home</a><img src="/img/logo.png" alt="Logo"></nav></header>
  <h1>Gardening for Beginners</h1>
  <h2>Choosing plants</h2>
  <h2>Watering schedule</h2>
  <h3>Tomatoes</h3>
  <p>Gardening rewards patience. Start small with herbs and tomatoes!</p>
  <img src="/img/herbs.png" alt="Fresh herbs">
  <img src="/img/soil.png">
  <a href="https://example.com/about">About us</a>
  <a href="https://seeds.example.org/catalog">Seed catalog</a>
  <a href="guides/soil">Soil guide</a>
  <a href="#comments">Comments</a>
  <a href="mailto:hello@example.com">Mail</a>
  <footer>Copyright footer <a href="https://twitter.com/example">Follow</a></footer>
  <script>var tracking = true;</script>
</body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def page_data():
    return parse_page(PAGE_URL, SAMPLE_HTML, status_code=200, load_time=420)
