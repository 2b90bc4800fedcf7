# main.py — site-ingest command line
import logging

import click

import chunker, classifier, crawler, extractor, ingest, robots, utils
from errors import IngestError
from rag import KnowledgeBase
from urlsafety import validate_url


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
def cli(verbose: bool) -> None:
    """Discover, extract and chunk website pages for a knowledge base."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

@cli.command()
@click.argument("url")
def validate(url: str) -> None:
    """Check a URL against the pre-flight safety rules."""
    result = validate_url(url)
    if not result.valid:
        raise click.ClickException(result.error)
    click.echo(click.style("✓ URL is allowed.", fg="green"))

@cli.command("robots")
@click.argument("url")
def robots_cmd(url: str) -> None:
    """Report whether robots.txt permits crawling the site."""
    if robots.check_robots_allowed(url):
        click.echo(click.style("✓ robots.txt allows crawling.", fg="green"))
    else:
        click.echo(click.style("✗ robots.txt disallows crawling.", fg="red"))
        raise SystemExit(1)

@cli.command()
@click.argument("url")
@click.option("--max-pages", default=crawler.DEFAULT_MAX_PAGES, show_default=True,
              help="Page budget (clamped to 10–1000)")
@click.option("--max-depth", default=crawler.DEFAULT_MAX_DEPTH, show_default=True,
              help="Link depth (clamped to 1–10)")
@click.option("--workers", default=crawler.CRAWL_WORKERS, show_default=True,
              help="Concurrent page fetches")
@click.option("--deadline", type=float, default=None,
              help="Stop after this many seconds and keep what was found")
@click.option("--content-only", is_flag=True, help="Hide likely listing/navigation pages.")
def discover(url: str, max_pages: int, max_depth: int, workers: int,
             deadline, content_only: bool) -> None:
    """List the pages of a site without extracting them."""
    try:
        result = crawler.discover_pages(url, max_pages, max_depth,
                                        workers=workers, deadline=deadline)
    except IngestError as exc:
        raise click.ClickException(str(exc))
    if result.error:
        raise click.ClickException(result.error)

    pages = classifier.filter_content_pages(result.pages) if content_only else result.pages
    click.echo(utils.format_pages(pages))
    click.echo(click.style(utils.format_crawl_summary(result, len(pages)), fg="green"))

@cli.command()
@click.argument("url")
def extract(url: str) -> None:
    """Fetch one page and print its cleaned text document."""
    try:
        result = extractor.extract_content(url)
    except IngestError as exc:
        raise click.ClickException(str(exc))
    click.echo(result.text)

@cli.command()
@click.argument("path", type=click.File("r", encoding="utf-8"))
@click.option("--max-chunk-size", type=int, default=None,
              help="Defaults to a size picked from the document's shape.")
@click.option("--overlap", default=chunker.DEFAULT_OVERLAP_SIZE, show_default=True)
def chunk(path, max_chunk_size, overlap: int) -> None:
    """Split a text document into overlapping chunks."""
    text = path.read()
    size = chunker.recommend_chunk_size(text) if max_chunk_size is None else max_chunk_size
    try:
        chunks = chunker.chunk_document(text, size, overlap)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    click.echo(utils.format_chunks(chunks))
    click.echo(click.style(f"✓ {len(chunks)} chunks at size {size}.", fg="green"))

@cli.command("ingest")
@click.argument("urls", nargs=-1, required=True)
@click.option("--query", default=None, help="Show the best matches after ingesting.")
def ingest_cmd(urls, query) -> None:
    """
    Extract, chunk and store several pages into an in-memory knowledge base.
    """
    kb = KnowledgeBase()
    try:
        report = ingest.ingest_pages(list(urls), kb)
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    for url, err in report.errors:
        click.echo(click.style(f"✗ {url}: {err}", fg="red"))
    colour = "green" if report.success else "yellow"
    click.echo(click.style(
        f"{report.succeeded} succeeded, {report.failed} failed "
        f"({len(report.document_ids)} chunks stored).", fg=colour))

    if query:
        for doc_id, score in kb.similarity_search(query, k=5):
            entry = kb.get(doc_id)
            click.echo(f"[{score:.2f}] {entry.source_metadata['url']}\n"
                       f"   {utils.preview(entry.text)}")

if __name__ == "__main__":
    cli()
