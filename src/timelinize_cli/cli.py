#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Timelinize CLI Utility
"""

# Talks to a locally running Timelinize server (default http://127.0.0.1:12002).
# The server owns all the real work: searching, importing, storage. This tool
# only turns flags into requests against its /api endpoints and prints the JSON
# that comes back.
#
# Most commands operate on one open timeline repository, identified by its ID.
# Set TIMELINIZE_REPO_ID (or pass --repo) before running them; `repos` lists
# the IDs of currently open repositories.

from __future__ import annotations
import argparse
import json
import sys
from typing import Optional, List, Any

from .client import DEFAULT_BASE_URL, eprint, new_client
from .config import BASE_URL_ENV_VAR, REPO_ID_ENV_VAR, Config, load_config, require_repo
from .options import (
    IMPORT_DATA_SOURCE,
    UNIQUE_CONSTRAINT_FIELDS,
    ItemUniqueConstraints,
    build_entity_search_options,
    build_processing_options,
    build_search_options,
    collect_files,
)

VERSION = "0.3.0"


# ── Utilities ────────────────────────────────────────────────────────────────
def progress_print(msg: str, quiet: bool=False):
    if not quiet:
        print(msg, file=sys.stderr)

def client_for(config: Config):
    return new_client(config.base_url, config.repo_id, verbose=config.verbose)

# ── Output Helpers ───────────────────────────────────────────────────────────
def print_json(data: Any, raw: bool=False):
    if raw:
        print(json.dumps(data, separators=(",",":")))
    else:
        print(json.dumps(data, indent=2))

def print_response(resp, config: Config):
    eprint(f"[API] HTTP {resp.status_code}", config.verbose)
    print_json(resp.json(), config.raw)

# ── Command Handlers ────────────────────────────────────────────────────────
def handle_search(args, config: Config):
    params = build_search_options(text=args.text, semantic=args.semantic)
    mode = "exact" if "data_text" in params else "semantic"
    progress_print(f"Searching items ({mode})...", config.quiet)
    print_response(client_for(config).search_items(params), config)

def handle_search_entities(args, config: Config):
    params = build_entity_search_options(config.repo_id, name=args.name, phone=args.phone, email=args.email)
    eprint(f"Entity attributes: {params['attributes']}", config.verbose)
    progress_print("Searching entities...", config.quiet)
    print_response(client_for(config).search_entities(params), config)

def handle_import(args, config: Config):
    files = collect_files(args.file, args.files)
    if not files:
        print("Error: no files given; use --file and/or --files.", file=sys.stderr)
        return
    constraints = ItemUniqueConstraints(**{f: getattr(args, f"unique_{f}") for f in UNIQUE_CONSTRAINT_FIELDS})
    opts = build_processing_options(
        integrity=args.integrity,
        overwrite_local_changes=args.overwrite_local_changes,
        interactive=args.interactive,
        estimate_total=args.estimate_total,
        constraints=constraints,
        constraints_json=args.constraints_json,
    )
    progress_print(f"Importing {len(files)} file(s) as '{args.data_source}'...", config.quiet)
    resp = client_for(config).import_files(args.data_source, files, opts.to_dict())
    print_response(resp, config)

def handle_repos(args, config: Config):
    print_response(client_for(config).open_repositories(), config)

def handle_roots(args, config: Config):
    print_response(client_for(config).file_selector_roots(), config)

def handle_open_repo(args, config: Config):
    verb = "Creating" if args.create else "Opening"
    progress_print(f"{verb} repository at {args.path}...", config.quiet)
    print_response(client_for(config).open_repository(args.path, create=args.create), config)

def handle_data_sources(args, config: Config):
    print_response(client_for(config).data_sources(), config)

def handle_charts(args, config: Config):
    print_response(client_for(config).charts(args.name), config)

# ── CLI Setup ────────────────────────────────────────────────────────────────
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timelinize", description="Timelinize CLI - Talk to a local Timelinize server")

    parser.add_argument("-v","--verbose", action="store_true", help="Enable verbose output for debugging.")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress messages to stderr.")
    parser.add_argument("--raw", action="store_true", help="Print compact single-line JSON.")
    parser.add_argument("--server", type=str, help=f"Server base URL (default: ${BASE_URL_ENV_VAR} or {DEFAULT_BASE_URL}).")
    parser.add_argument("--repo", type=str, help=f"Repository ID (default: ${REPO_ID_ENV_VAR}).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subs = parser.add_subparsers(dest="cmd", title="Commands", required=True)

    # --- search ---
    p_search = subs.add_parser("search", help="Search items by exact text or semantic similarity.")
    p_search.add_argument("--text", type=str, help="Exact text to match.")
    p_search.add_argument("--semantic", type=str, help="Text to match semantically.")
    p_search.set_defaults(func=handle_search, needs_repo=True)
    def check_search_args(args):
        if not args.text and not args.semantic:
            p_search.error("one of --text or --semantic is required")
    p_search.set_defaults(check=check_search_args)

    # --- search-entities ---
    p_ent = subs.add_parser("search-entities", help="Search entities (people, etc.) by attribute.")
    p_ent.add_argument("--name", type=str, help="Entity name.")
    p_ent.add_argument("--phone", type=str, help="Phone number attribute.")
    p_ent.add_argument("--email", type=str, help="Email address attribute.")
    p_ent.set_defaults(func=handle_search_entities, needs_repo=True)

    # --- import ---
    p_imp = subs.add_parser("import", help="Import files into the repository.")
    p_imp.add_argument("--data-source", default=IMPORT_DATA_SOURCE,
                       help=f"Data source name to import with (default: {IMPORT_DATA_SOURCE}).")
    p_imp.add_argument("--file", type=str, help="A single file to import.")
    p_imp.add_argument("--files", type=str, help="Comma separated list of files to import.")
    p_imp.add_argument("--integrity", action="store_true", help="Run integrity checks while importing.")
    p_imp.add_argument("--overwrite-local-changes", action="store_true", help="Let imported data overwrite local edits.")
    p_imp.add_argument("--interactive", action=argparse.BooleanOptionalAction, default=None,
                       help="Run the import interactively (omitted from the job unless given).")
    p_imp.add_argument("--estimate-total", action=argparse.BooleanOptionalAction, default=True,
                       help="Estimate the total item count before importing.")
    defaults = ItemUniqueConstraints()
    uniq = p_imp.add_argument_group("item unique constraints")
    for f in UNIQUE_CONSTRAINT_FIELDS:
        uniq.add_argument(f"--unique-{f.replace('_', '-')}", dest=f"unique_{f}",
                          action=argparse.BooleanOptionalAction, default=getattr(defaults, f),
                          help=f"Use {f} when deciding if an item is a duplicate.")
    uniq.add_argument("--constraints-json", type=str, metavar="JSON",
                      help="JSON object that replaces the unique constraints above entirely.")
    p_imp.set_defaults(func=handle_import, needs_repo=True)

    # --- repository & metadata commands ---
    p_repos = subs.add_parser("repos", help="List open repositories.")
    p_repos.set_defaults(func=handle_repos)

    p_roots = subs.add_parser("roots", help="List file selector roots on the server.")
    p_roots.set_defaults(func=handle_roots)

    p_open = subs.add_parser("open-repo", help="Open (or create) a repository by path.")
    p_open.add_argument("path", type=str, help="Repository folder on the server.")
    p_open.add_argument("--create", action="store_true", help="Create the repository if it does not exist.")
    p_open.set_defaults(func=handle_open_repo)

    p_ds = subs.add_parser("data-sources", help="List data sources known to the repository.")
    p_ds.set_defaults(func=handle_data_sources, needs_repo=True)

    p_charts = subs.add_parser("charts", help="Fetch chart statistics by name.")
    p_charts.add_argument("name", type=str, help="Chart name (e.g. periodical, attributes_stats).")
    p_charts.set_defaults(func=handle_charts, needs_repo=True)

    return parser

def main(argv: Optional[List[str]]=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if hasattr(args, 'check') and callable(args.check):
        args.check(args)

    config = load_config(args)
    if getattr(args, "needs_repo", False):
        require_repo(config)

    args.func(args, config)

if __name__=="__main__":
    main()
