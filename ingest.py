#!/usr/bin/env python3
"""
Catalog ingestion script.

Creates the Qdrant collection if needed, embeds every product description
and upserts it keyed by product id. Safe to run more than once.

Usage:
    python ingest.py

Set CATALOG_PATH to a JSON array of {id, name, price, description}
objects to load your own catalog instead of the built-in one.
"""

import sys
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from src.config.log import setup_logging
from src.config.settings import describe_missing, get_settings
from src.ingest.pipeline import IngestionPipeline
from src.llm.embeddings import EmbeddingClient, get_embeddings
from src.memory.vector_store import VectorStoreClient
from src.models.product import load_catalog


def main():
    console = Console()

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] missing or invalid {describe_missing(e)}")
        sys.exit(1)

    setup_logging(settings.log_level)

    try:
        products = load_catalog(settings.catalog_path)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Cannot load catalog:[/bold red] {e}")
        sys.exit(1)

    pipeline = IngestionPipeline(
        EmbeddingClient(get_embeddings(settings)),
        VectorStoreClient.from_settings(settings),
        settings.collection_name,
        dimensions=settings.embedding_dimensions,
        distance=settings.distance,
    )

    created = pipeline.ensure_collection()
    if not created.ok:
        console.print(f"[bold red]Cannot prepare collection '{escape(settings.collection_name)}':[/bold red] {escape(created.message)}")
        sys.exit(1)
    if created.value:
        console.print(f"Collection '{escape(settings.collection_name)}' created.")
    else:
        console.print(f"Collection '{escape(settings.collection_name)}' already exists, continuing.")

    report = pipeline.run(products)

    names = {p.id: p.name for p in products}
    for product_id in report.succeeded:
        console.print(f"[green]✓[/green] {escape(names[product_id])}", highlight=False)
    for product_id in report.failed:
        console.print(f"[red]✗[/red] {escape(names[product_id])}: {escape(report.reasons[product_id])}", highlight=False)

    total = pipeline.store.count(settings.collection_name)
    console.print(
        f"\n{len(report.succeeded)} inserted, {len(report.failed)} failed. "
        f"Collection now holds {total} product(s)."
    )


if __name__ == "__main__":
    main()
