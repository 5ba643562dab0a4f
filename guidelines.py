import ipaddress
import logging
import os
import socket
from datetime import datetime, timezone
from typing import Dict, List, Optional
from urllib.parse import urlsplit

import requests

from config import (
    GUIDELINE_FETCH_ALLOWED_HOSTS,
    GUIDELINE_FETCH_TIMEOUT,
    SIMULATED_UPLOAD_EXTENSIONS,
    TEXT_UPLOAD_EXTENSIONS,
)
from schemas import GuidelineDocument

logger = logging.getLogger("guidelines")


class GuidelineError(Exception):
    """A guideline document could not be processed or retrieved."""


class GuidelineFetchError(GuidelineError):
    """The remote server could not be reached or did not return the document."""


def _now():
    return datetime.now(timezone.utc)


def _content_kind(file_name, content_type=None):
    # "text", "simulated" or None for unsupported
    ext = os.path.splitext(file_name)[1].lower()
    mime = (content_type or "").split(";")[0].strip().lower()
    if ext in SIMULATED_UPLOAD_EXTENSIONS or mime == "application/pdf":
        return "simulated"
    if ext in TEXT_UPLOAD_EXTENSIONS or mime.startswith("text/"):
        return "text"
    return None


def _build_document(file_name, data, cancer_type, content_type=None):
    if not data:
        raise GuidelineError(f'"{file_name}" is empty.')

    kind = _content_kind(file_name, content_type)
    processed_at = _now()
    if kind == "text":
        try:
            content = data.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise GuidelineError(f'"{file_name}" is not valid UTF-8 text.') from e
        if not content:
            raise GuidelineError(f'"{file_name}" contains no text.')
    elif kind == "simulated":
        content = (
            f'Simulated content from "{file_name}" for {cancer_type}. '
            f"Processed at {processed_at.strftime('%H:%M:%S')}. This is a brief preview."
        )
    else:
        allowed = ", ".join(TEXT_UPLOAD_EXTENSIONS + SIMULATED_UPLOAD_EXTENSIONS)
        raise GuidelineError(f'Unsupported file type for "{file_name}". Allowed: {allowed}')

    return GuidelineDocument(file_name=file_name, processed_at=processed_at, content=content)


def process_upload(file_name: str, data: bytes, cancer_type: str) -> GuidelineDocument:
    """
    Turn an uploaded file into a guideline document.

    PDF bodies are not parsed; their content is simulated from the file name.
    Plain-text uploads are used verbatim.
    """
    document = _build_document(file_name, data, cancer_type)
    logger.info(f"processed guideline upload {file_name!r} for {cancer_type} ({len(document.content)} chars)")
    return document


# ============================================================
# URL FETCH
# ============================================================

def check_fetch_url(url: str) -> str:
    """
    Refuse URLs the server should not request on a caller's behalf.

    Only http(s) to public addresses, and only allowlisted hosts when
    GUIDELINE_FETCH_ALLOWED_HOSTS is set. Returns the host name.
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise GuidelineError(f"Only http and https URLs can be fetched: {url}")
    host = (parts.hostname or "").lower()
    if not host:
        raise GuidelineError(f"URL has no host: {url}")
    if GUIDELINE_FETCH_ALLOWED_HOSTS and host not in GUIDELINE_FETCH_ALLOWED_HOSTS:
        raise GuidelineError(f"Host {host} is not an allowed guideline source.")

    try:
        infos = socket.getaddrinfo(host, parts.port or None)
    except (socket.gaierror, UnicodeError) as e:
        raise GuidelineError(f"Could not resolve host {host}.") from e

    for info in infos:
        address = ipaddress.ip_address(info[4][0].split("%")[0])
        if not address.is_global:
            logger.warning(f"refused guideline fetch from {url}: {host} resolves to {address}")
            raise GuidelineError(f"Host {host} is not a public address.")
    return host


def fetch_guideline(url: str, cancer_type: str) -> GuidelineDocument:
    """Download a published guideline; PDFs are simulated like uploads."""
    host = check_fetch_url(url)
    try:
        r = requests.get(url, timeout=GUIDELINE_FETCH_TIMEOUT, allow_redirects=False)
        r.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"guideline fetch failed for {url}: {e}")
        raise GuidelineFetchError(f"Could not retrieve guideline from {url}.") from e
    if r.is_redirect:
        raise GuidelineFetchError(f"Guideline at {url} redirects elsewhere; fetch the final URL instead.")

    file_name = os.path.basename(urlsplit(url).path.rstrip("/")) or host
    document = _build_document(file_name, r.content, cancer_type, r.headers.get("Content-Type"))
    logger.info(f"fetched guideline {file_name!r} for {cancer_type} from {url}")
    return document


class GuidelineLibrary:
    """Guideline documents currently available, keyed by cancer type."""

    def __init__(self):
        self._documents: Dict[str, List[GuidelineDocument]] = {}

    def add(self, cancer_type: str, document: GuidelineDocument, replace: bool = True) -> Optional[GuidelineDocument]:
        """
        Store a document for a cancer type.

        With replace=True the new document supersedes everything stored for
        that type; the previously newest document is returned, if any.
        """
        existing = self._documents.get(cancer_type, [])
        displaced = existing[-1] if existing and replace else None
        if replace:
            self._documents[cancer_type] = [document]
        else:
            self._documents[cancer_type] = existing + [document]

        if displaced:
            logger.info(f"{cancer_type}: {document.file_name!r} replaced {displaced.file_name!r}")
        return displaced

    def documents(self, cancer_type: str) -> List[GuidelineDocument]:
        return list(self._documents.get(cancer_type, []))

    def file_names(self, cancer_type: str) -> List[str]:
        return [d.file_name for d in self._documents.get(cancer_type, [])]

    def status(self) -> Dict[str, List[str]]:
        return {ct: self.file_names(ct) for ct in self._documents if self._documents[ct]}

    def clear(self, cancer_type: Optional[str] = None):
        if cancer_type is None:
            self._documents.clear()
        else:
            self._documents.pop(cancer_type, None)

    def consolidated_content(self, cancer_type: str) -> Optional[str]:
        docs = self._documents.get(cancer_type)
        if not docs:
            return None
        blocks = [
            f"--- START OF DOCUMENT: {d.file_name} ---\n{d.content}\n--- END OF DOCUMENT: {d.file_name} ---"
            for d in docs
        ]
        return "\n\n".join(blocks)
