# -*- coding: utf-8 -*-
"""Run configuration, resolved once per invocation from flags and environment."""

from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from typing import Optional, Mapping

from .client import DEFAULT_BASE_URL

REPO_ID_ENV_VAR  = "TIMELINIZE_REPO_ID"
BASE_URL_ENV_VAR = "TIMELINIZE_URL"


@dataclass(frozen=True)
class Config:
    base_url: str = DEFAULT_BASE_URL
    repo_id: Optional[str] = None
    verbose: bool = False
    quiet: bool = False
    raw: bool = False


def load_config(args, environ: Optional[Mapping[str,str]]=None) -> Config:
    """Flag beats environment beats default."""
    env = os.environ if environ is None else environ
    return Config(
        base_url=getattr(args, "server", None) or env.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL,
        repo_id=getattr(args, "repo", None) or env.get(REPO_ID_ENV_VAR) or None,
        verbose=bool(getattr(args, "verbose", False)),
        quiet=bool(getattr(args, "quiet", False)),
        raw=bool(getattr(args, "raw", False)),
    )


def require_repo(config: Config) -> str:
    if not config.repo_id:
        print(f"Error: Missing {REPO_ID_ENV_VAR} (set it or pass --repo)", file=sys.stderr)
        sys.exit(1)
    return config.repo_id
