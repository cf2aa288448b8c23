"""Round trip a report query through a URL.

Run with: python examples/report_query.py
"""

import logging
from datetime import datetime, timezone

from urlquery import (
    BoolConverter,
    IntArrayConverter,
    IntConverter,
    IsoDateConverter,
    StringConverter,
    Url,
    UrlQueryMixin,
    configure_logging,
    query_param,
)

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


class ReportQuery(UrlQueryMixin):
    """Filters for a sales report page."""

    start_time = query_param(IsoDateConverter, url_key="stTm")
    page_number = query_param(IntConverter, default=1, url_key="pg")
    region = query_param(StringConverter)
    store_ids = query_param(IntArrayConverter, default_factory=list, url_key="ids")
    include_archived = query_param(BoolConverter, default=False, url_key="arch")
    session = query_param(StringConverter, read_only=True)


def main():
    configure_logging("debug")

    incoming = (
        "https://reports.example.com/sales?stTm=2024-01-01T00:00:00Z"
        "&pg=2&region=north&ids=4%3B8%3B15&session=abc123"
    )
    query = ReportQuery.from_url(incoming)
    print(f"Parsed: start={query.start_time} page={query.page_number} "
          f"region={query.region} stores={query.store_ids} session={query.session}")

    query.page_number += 1
    query.include_archived = True
    query.start_time = datetime(2024, 2, 1, tzinfo=timezone.utc)

    base = Url.parse(incoming)
    print(f"Next page: {base.protocol}://{base.host}{base.path}?{query.to_query_string()}")


if __name__ == "__main__":
    main()
