import os
import logging
from werkzeug.security import safe_join

logger = logging.getLogger(__name__)


class FilesystemPublisher:
    """
    Static page cache living under cache_dir/<url path>/index.html.

    Republishing a URL evicts its cached file so the next request
    regenerates it from the current live content.
    """

    def __init__(self, cache_dir):
        self.cache_dir = cache_dir

    def path_for(self, url):
        """Cached file for url, or None when url would leave cache_dir."""
        relative = url.strip("/")
        if not relative:
            return os.path.join(self.cache_dir, "index.html")
        return safe_join(self.cache_dir, relative, "index.html")

    def republish(self, urls):
        evicted = []
        for url in urls:
            file_path = self.path_for(url)
            if file_path is None:
                logger.warning("Refusing to evict %r: outside the cache directory", url)
                continue
            if os.path.exists(file_path):
                os.remove(file_path)
                evicted.append(url)
        logger.info("Republished %d url(s), evicted %d cached file(s)", len(urls), len(evicted))
        return evicted
