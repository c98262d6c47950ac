import httpx

BASE = "https://www.furaffinity.net"

LANDING_MODERN = '<html><body data-static-path="/themes/beta"><p>hi</p></body></html>'
LANDING_CLASSIC = '<html><body data-static-path="/themes/classic"><p>hi</p></body></html>'

SUBMISSION_HTML = """
<html><body data-static-path="/themes/beta">
<div class="submission-id-sub-container">
  <div class="submission-title">
    <h2><p>  Test Piece  </p></h2>
  </div>
  by rokah, posted <span class="popup_date" title="2023-03-05T10:00:00">2 years ago</span>
</div>
<div class="submission-description">
  A <strong>bold</strong> fox.
</div>
<div class="submission-sidebar">
  <div class="rating"><span class="font-large"> General </span></div>
  <div class="views"><span class="font-large"> 120 </span></div>
  <div class="favorites"><span class="font-large"> 7 </span></div>
  <section class="tags-row">
    <span class="tags"><a href="/search/@keywords fox">fox</a></span>
    <span class="tags"><a href="/search/@keywords art">art</a></span>
  </section>
  <div class="download"><a href="//d.furaffinity.net/art/rokah/1678000000/1678000000.rokah_piece.png">Download</a></div>
</div>
<section class="info text">
  <div>Category Artwork (Digital) / All</div>
  <div>Species Fox</div>
  <div>Gender Any</div>
  <div>Size 1200 x 800px</div>
  <div>File Size 512 kB</div>
</section>
<section class="folder-list-container">
  <div><a href="/gallery/rokah/folder/1/Favorites">
      Favorites
  </a></div>
</section>
</body></html>
"""

IMAGE_URL = "https://d.furaffinity.net/art/rokah/1678000000/1678000000.rokah_piece.png"
IMAGE = b"\x89PNG fake image bytes"


def gallery_html(hrefs: list[str]) -> str:
    figures = "".join(
        f'<figure><b><u><a href="{href}"><img src="x.jpg"></a></u></b></figure>' for href in hrefs
    )
    return f'<html><body><section id="gallery-gallery">{figures}</section></body></html>'


class FakeSite:
    """Routes requests to canned pages and records the order they came in."""

    def __init__(self, pages=None, landing=LANDING_MODERN, image=IMAGE):
        self.pages = pages or {}
        self.landing = landing
        self.image = image
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url == BASE + "/":
            return httpx.Response(200, html=self.landing)
        if url in self.pages:
            return httpx.Response(200, html=gallery_html(self.pages[url]))
        if url.startswith(BASE + "/gallery/") or url.startswith(BASE + "/scraps/"):
            return httpx.Response(200, html=gallery_html([]))
        if url.startswith(BASE + "/view/"):
            return httpx.Response(200, html=SUBMISSION_HTML)
        if url == IMAGE_URL:
            return httpx.Response(200, content=self.image)
        return httpx.Response(404)
