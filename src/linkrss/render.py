"""RSS 2.0 rendering of channels.

Text fields are substituted verbatim; markup characters in titles are not
escaped.
"""

from datetime import datetime

from linkrss.extractor import format_pub_date
from linkrss.models import ChannelDocument, Item

CHANNEL_HEADER = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0">
<channel>
 <title>{title}</title>
 <description>{description}</description>
 <link>{link}</link>
 <lastBuildDate>{date}</lastBuildDate>
 <pubDate>{date}</pubDate>

"""

ITEM_TEMPLATE = """ <item>
  <title>{title}</title>
  <description>{description}</description>
  <link>{link}</link>
  <pubDate>{date}</pubDate>
 </item>
"""

CHANNEL_FOOTER = """</channel>
</rss>"""


def render_item(item: Item) -> str:
    return ITEM_TEMPLATE.format(
        title=item.title,
        description=item.description,
        link=item.link,
        date=item.date,
    )


def render_channel(document: ChannelDocument, now: datetime | None = None) -> str:
    """Render the whole channel, newest item first."""
    if now is None:
        now = datetime.now().astimezone()
    parts = [
        CHANNEL_HEADER.format(
            title=document.title,
            description=document.description,
            link=document.link,
            date=format_pub_date(now),
        )
    ]
    parts.extend(render_item(item) for item in reversed(document.items))
    parts.append(CHANNEL_FOOTER)
    return "".join(parts)
