"""
Service de generation de la galerie HTML paginee.

Chaque mini vignette du catalogue devient un fragment HTML autonome (image
inline en data URI). Les fragments sont repartis sur des pages dont la taille
respecte un budget en octets, puis rendus via un template Jinja2.

Les fragments sont echappes ici (entites &amp; &lt; &gt; &quot; &#x27;) ;
le template est donc rendu sans auto-echappement.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePath, PureWindowsPath
from typing import Optional
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader
from loguru import logger

from mediaindexer import __version__
from mediaindexer.config import Settings
from mediaindexer.core.entities import GalleryItem
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.utils.constants import HTML_FRAGMENT_OVERHEAD_BYTES, NAVIGATION_WINDOW

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
PAGE_TEMPLATE = "gallery_page.html.j2"

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)


def escape_html(text: Optional[str]) -> str:
    """Echappe & < > " ' ; None donne une chaine vide."""
    if text is None:
        return ""
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def file_uri(file_path: str) -> str:
    """
    Construit une URI file:// en encodant chaque segment du chemin.

    Les separateurs sont conserves : "/a b/c.jpg" -> "file:///a%20b/c.jpg".
    Le lecteur d'un chemin Windows est garde tel quel ("C:\\x\\y.jpg" ->
    "file:///C:/x/y.jpg"), un chemin UNC donne l'hote de l'URI.
    """
    windows_path = PureWindowsPath(file_path)
    path = windows_path if windows_path.drive else PurePath(file_path)
    parts = path.parts[1:] if path.anchor else path.parts
    segments = [quote(part, safe="") for part in parts]

    if path.drive.startswith("\\\\"):
        return "file:" + path.drive.replace("\\", "/") + "/" + "/".join(segments)
    if path.drive:
        segments.insert(0, path.drive)
    prefix = "file:///" if path.anchor else "file://"
    return prefix + "/".join(segments)


def render_fragment(item: GalleryItem) -> str:
    """Fragment HTML d'une mini vignette (payload et format None -> chaine vide)."""
    name = escape_html(PurePath(item.file_path).name)
    image_format = (item.format or "").lower()
    payload = item.base64_data or ""
    return (
        '<div class="thumbnail-container">'
        f'<a href="{file_uri(item.file_path)}" title="{name}" tabindex="0">'
        f'<img src="data:image/{image_format};base64,{payload}" alt="{name}" '
        f'width="{item.width}" height="{item.height}" loading="lazy" />'
        "</a>"
        "</div>\n"
    )


def fragment_size(fragment: str) -> int:
    """Taille d'un fragment en octets UTF-8."""
    return len(fragment.encode("utf-8"))


def paginate(fragments: Sequence[str], max_page_bytes: int) -> list[list[str]]:
    """
    Repartit les fragments sur des pages par remplissage glouton.

    Une nouvelle page commence quand le fragment suivant ferait depasser le
    budget et que la page courante n'est pas vide. Aucune page n'est vide ;
    un fragment plus gros que le budget occupe une page a lui seul.
    """
    pages: list[list[str]] = []
    current: list[str] = []
    current_size = 0

    for fragment in fragments:
        size = fragment_size(fragment)
        if current and current_size + size > max_page_bytes:
            pages.append(current)
            current = []
            current_size = 0
        current.append(fragment)
        current_size += size

    if current:
        pages.append(current)
    return pages


def estimate_total_pages(payload_lengths: Sequence[int], max_page_bytes: int) -> int:
    """
    Estime le nombre de pages a partir de la taille moyenne des payloads.

    Chaque element compte sa taille moyenne plus un surcout HTML fixe.
    Retourne 1 pour un corpus vide.
    """
    if not payload_lengths:
        return 1
    average = sum(payload_lengths) // len(payload_lengths)
    items_per_page = max(1, max_page_bytes // (average + HTML_FRAGMENT_OVERHEAD_BYTES))
    return math.ceil(len(payload_lengths) / items_per_page)


def page_file_name(index_file_name: str, page_number: int) -> str:
    """Nom du fichier d'une page : index.html, puis index-page-2.html, ..."""
    if page_number == 1:
        return index_file_name
    name = PurePath(index_file_name)
    return f"{name.stem}-page-{page_number}{name.suffix}"


@dataclass(frozen=True)
class NavEntry:
    """Element de navigation (href None pour une ellipse)."""

    label: str
    href: Optional[str] = None
    current: bool = False


def build_navigation(current_page: int, total_pages: int, index_file_name: str) -> list[NavEntry]:
    """
    Construit la navigation d'une page.

    Precedent, fenetre de +/- 5 pages avec la premiere et la derniere page
    (ellipses si besoin), puis Suivant. Vide s'il n'y a qu'une page.
    """
    if total_pages <= 1:
        return []

    def link(page: int, label: Optional[str] = None) -> NavEntry:
        return NavEntry(
            label=label or str(page),
            href=page_file_name(index_file_name, page),
            current=label is None and page == current_page,
        )

    entries: list[NavEntry] = []
    if current_page > 1:
        entries.append(link(current_page - 1, "&laquo; Previous"))

    start = max(1, current_page - NAVIGATION_WINDOW)
    end = min(total_pages, current_page + NAVIGATION_WINDOW)

    if start > 1:
        entries.append(link(1))
        if start > 2:
            entries.append(NavEntry(label="..."))

    entries.extend(link(page) for page in range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            entries.append(NavEntry(label="..."))
        entries.append(link(total_pages))

    if current_page < total_pages:
        entries.append(link(current_page + 1, "Next &raquo;"))

    return entries


@dataclass
class GalleryResult:
    """
    Resultat de la generation de la galerie.

    Attributs:
        pages_written: Nombre de pages ecrites
        items_written: Nombre de vignettes publiees
        page_files: Chemins des pages, dans l'ordre
    """

    pages_written: int = 0
    items_written: int = 0
    page_files: list[Path] = field(default_factory=list)


class GalleryService:
    """Service de publication de la galerie HTML statique."""

    def __init__(self, catalog_repo: ICatalogRepository, settings: Settings) -> None:
        self._catalog_repo = catalog_repo
        self._settings = settings
        self._env = Environment(
            loader=FileSystemLoader(_TEMPLATES_DIR),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._env.globals["app_version"] = f"Media Indexer v{__version__}"

    def render_page(
        self,
        fragments: Iterable[str],
        page_number: int,
        total_pages: int,
    ) -> str:
        """Rend le document HTML complet d'une page."""
        template = self._env.get_template(PAGE_TEMPLATE)
        return template.render(
            page_number=page_number,
            total_pages=total_pages,
            content="".join(fragments),
            nav_entries=build_navigation(
                page_number, total_pages, self._settings.html.index_file_name
            ),
        )

    def generate_html_index(self) -> GalleryResult:
        """
        Genere les pages de la galerie sous html_output_dir.

        Un catalogue sans mini vignette n'ecrit aucune page.
        """
        logger.info("Debut de la generation de l'index HTML")
        output_dir = self._settings.html_output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        items = self._catalog_repo.list_gallery_items()
        logger.info(f"{len(items)} mini vignettes a inclure dans l'index HTML")

        result = GalleryResult(items_written=len(items))
        if not items:
            logger.warning("Aucune mini vignette : aucune page generee")
            return result

        budget = self._settings.html.max_page_size_bytes
        pages = paginate([render_fragment(item) for item in items], budget)
        estimate = estimate_total_pages([len(item.base64_data or "") for item in items], budget)
        total_pages = len(pages)
        logger.debug(f"Pages estimees: {estimate}, pages reelles: {total_pages}")

        index_file_name = self._settings.html.index_file_name
        for page_number, fragments in enumerate(pages, start=1):
            page_path = output_dir / page_file_name(index_file_name, page_number)
            page_path.write_text(
                self.render_page(fragments, page_number, total_pages), encoding="utf-8"
            )
            result.page_files.append(page_path)
            logger.debug(f"Page HTML generee: {page_path}")

        result.pages_written = len(result.page_files)
        logger.info(f"{result.pages_written} page(s) HTML generee(s)")
        return result
