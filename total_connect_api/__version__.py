__title__ = "total-connect-api"
__description__ = "Async client for the Resideo Total Connect alarm service."
__version__ = "0.2.0"
__author__ = "Total Connect API contributors"
__author_email__ = "total-connect-api@users.noreply.github.com"
__license__ = "MIT"
