"""
Hyperlink extraction from rendered HTML.
Returns raw href values; resolution and filtering happen in the frontier.
"""

from bs4 import BeautifulSoup, SoupStrainer

# Parse only <a href> elements
LINK_STRAINER = SoupStrainer("a", href=True)


def extract_links(html):
    """
    Extract raw href values from <a> tags in document order.
    Empty hrefs are skipped; nothing is resolved or deduplicated here.
    """
    if not html:
        return []
    soup = BeautifulSoup(html, 'html.parser', parse_only=LINK_STRAINER)
    return [a['href'] for a in soup.find_all('a', href=True) if a['href']]


def extract_base_href(html):
    """href of the first <base> element, or None when the document has none."""
    if not html:
        return None
    soup = BeautifulSoup(html, 'html.parser', parse_only=SoupStrainer("base", href=True))
    base = soup.find('base', href=True)
    if base is None or not base['href'].strip():
        return None
    return base['href']
