#!/usr/bin/env python3
"""
Product Chatbot - Main Entry Point

Interactive product search: each query is embedded with the OpenAI
embeddings API and matched against the products stored in Qdrant.

Usage:
    python main.py

Requirements:
    - A reachable Qdrant instance with the catalog loaded (python ingest.py)
    - An OpenAI API key

Environment Variables:
    See .env.example for configuration options
"""

import sys
from pydantic import ValidationError
from rich.console import Console
from src.agent.graph import create_query_graph
from src.cli.chat import ChatCLI
from src.config.log import setup_logging
from src.config.settings import describe_missing, get_settings
from src.llm.embeddings import EmbeddingClient, get_embeddings
from src.memory.vector_store import VectorStoreClient


def main():
    """
    Initialize and run the chatbot.

    Steps:
    1. Load configuration from environment (fatal if incomplete)
    2. Build the embedding and vector store clients
    3. Create the LangGraph query workflow
    4. Start the terminal chat interface
    """
    console = Console()

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] missing or invalid {describe_missing(e)}")
        console.print("Set them in the environment or in a .env file (see .env.example).")
        sys.exit(1)

    setup_logging(settings.log_level)

    console.print(f"Embeddings: {settings.embedding_model}")
    console.print(f"Qdrant: {settings.qdrant_url} (collection '{settings.collection_name}')")

    embedder = EmbeddingClient(get_embeddings(settings))
    store = VectorStoreClient.from_settings(settings)

    graph = create_query_graph(
        embedder,
        store,
        settings.collection_name,
        top_k=settings.top_k,
    )

    cli = ChatCLI(graph, history_file=settings.history_file, console=console)
    cli.run()


if __name__ == "__main__":
    main()
