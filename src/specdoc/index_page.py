"""
Index page generator: one table row per spec version, newest first.
"""

from typing import TYPE_CHECKING, Optional, Sequence

from jinja2 import Environment

from specdoc.config import DEFAULT_INDEX_TITLE

if TYPE_CHECKING:
    from specdoc.discovery import SpecDescriptor

INDEX_TEMPLATE = """\
<html>
  <head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
    <style>
      body {
        color: #333333;
        font: 13pt/18pt Cambria, 'Palatino Linotype', Palatino, 'Liberation Serif', serif;
        margin: 6rem auto 3rem;
        max-width: 780px;
      }
      @media (min-width: 1240px) {
        body {
          padding-right: 300px;
        }
      }
      a {
        color: #3B5998;
        text-decoration: none;
      }
      a:hover {
        text-decoration: underline;
      }
      h1 {
        font-size: 1.5em;
        margin: 8rem 0 2em;
      }
      td {
        padding-bottom: 5px;
      }
      td + td {
        padding-left: 2ch;
      }
    </style>
  </head>
  <body>
    <h1>{{ heading }}</h1>
    <table>
{% for spec in specs %}
      <tr>
        <td>{% if loop.first %}<em>Latest Release</em>{% endif %}</td>
        <td><a href="{{ spec.basename }}.html" keep-hash>Version {{ spec.version }}</a></td>
      </tr>
{% endfor %}
    </table>
    <script>
      const links = document.getElementsByTagName('a');
      for (const link of links) {
        if (link.hasAttribute('keep-hash')) {
          link.href += location.hash;
          link.removeAttribute('keep-hash');
        }
      }
    </script>
  </body>
</html>
"""

_environment = Environment(autoescape=True, trim_blocks=True, keep_trailing_newline=True)
_template = _environment.from_string(INDEX_TEMPLATE)


def render_index(
    descriptors: Sequence["SpecDescriptor"],
    title: str = DEFAULT_INDEX_TITLE,
    heading: Optional[str] = None,
) -> str:
    """
    Render the version listing page.

    The first descriptor is marked as the latest release, so callers pass
    the list in version-descending order. Every link carries ``keep-hash``;
    the embedded script appends the current URL fragment to those links so a
    deep link into one version survives switching to another.

    Args:
        descriptors: Specs to list, newest first
        title: Page title
        heading: Page heading, defaults to the title

    Returns:
        The complete HTML document
    """
    return _template.render(
        specs=descriptors, title=title, heading=heading or title
    )
