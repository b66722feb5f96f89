import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .config import Config
from .context import LintContext
from .errors import ConfigValidationError, DirectiveParseError, LintError, RuleExecutionError
from .inline import InlineState
from .models import Problem
from .registry import RuleRegistry, default_registry
from .resolver import resolve_rule_config

logger = logging.getLogger(__name__)

LintResult = tuple[Path, list[Problem]]


class LinterEngine:
    """Core engine for YAML linting"""

    def __init__(
        self,
        config: Config | None = None,
        registry_factory: Callable[[], RuleRegistry] = default_registry,
        jobs: int | None = None,
    ):
        self.config = config if config is not None else Config()
        self.registry_factory = registry_factory
        self.registry = registry_factory()
        self.jobs = jobs

    def lint_content(self, path: Path | str, content: str) -> list[Problem]:
        """Run every enabled rule over `content` and return sorted problems"""
        path = Path(path)
        context = LintContext(path, content)

        try:
            inline_state = InlineState.from_content(content)
        except DirectiveParseError as exc:
            raise DirectiveParseError(f"{path}: {exc.message}", line=exc.line, path=path) from exc

        if inline_state.is_file_ignored():
            logger.debug("%s: ignored by inline directive", path)
            return []

        problems: list[Problem] = []
        for rule in self.registry.rules():
            rule_config = resolve_rule_config(rule.rule_id, self.config, self.registry, inline_state)
            if not rule_config.enabled:
                logger.debug("%s: skipping disabled rule '%s'", path, rule.rule_id)
                continue

            try:
                rule.validate_config(rule_config)
            except ConfigValidationError as exc:
                raise ConfigValidationError(
                    f"Invalid configuration for rule '{rule.rule_id}' in {path}: {exc.message}",
                    rule_id=rule.rule_id,
                    path=path,
                ) from exc

            try:
                found = rule.check(context, rule_config)
            except Exception as exc:
                raise RuleExecutionError(
                    f"Rule '{rule.rule_id}' failed on file {path}: {exc}",
                    rule_id=rule.rule_id,
                    path=path,
                ) from exc

            problems.extend(p for p in found if not inline_state.is_rule_disabled(p.rule_id, p.line))

        return sorted(problems)

    def lint_file(self, path: Path | str) -> list[Problem]:
        path = Path(path)
        if self.config.is_file_ignored(path) or not self.config.is_yaml_file(path):
            logger.debug("Skipping %s: ignored or not a YAML file", path)
            return []

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LintError(f"Failed to read file {path}: {exc}", path) from exc

        return self.lint_content(path, content)

    def collect_files(self, paths: Iterable[Path | str]) -> list[Path]:
        """Expand files and directories into the list of files to lint"""
        paths = [Path(path) for path in paths]
        files: list[Path] = []
        for path in paths:
            if path.is_file():
                files.append(path)
            elif path.is_dir():
                for dirpath, dirnames, filenames in os.walk(path):
                    dirnames.sort()
                    for filename in sorted(filenames):
                        file_path = Path(dirpath) / filename
                        if not file_path.is_file():
                            continue
                        if self.config.is_file_ignored(file_path) or not self.config.is_yaml_file(file_path):
                            continue
                        files.append(file_path)
            else:
                raise LintError(f"Path does not exist: {path}", path)

        logger.debug("Collected %d files from %d paths", len(files), len(paths))
        return files

    def lint_paths(self, paths: Iterable[Path | str]) -> list[LintResult]:
        return self.lint_files_parallel(self.collect_files(paths))

    def lint_files_parallel(self, files: list[Path]) -> list[LintResult]:
        """Lint each file on a worker thread; the first failure aborts the batch"""
        if not files:
            return []

        logger.info("Linting %d files", len(files))
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            futures = [executor.submit(self._lint_isolated, path) for path in files]
            try:
                return [(path, future.result()) for path, future in zip(files, futures)]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

    def _lint_isolated(self, path: Path) -> list[Problem]:
        # Each worker gets a fresh registry; only the read-only config is shared
        worker = LinterEngine(self.config, self.registry_factory)
        return worker.lint_file(path)


def lint_content(path: Path | str, content: str, config: Config | None = None) -> list[Problem]:
    return LinterEngine(config).lint_content(path, content)


def lint_file(path: Path | str, config: Config | None = None) -> list[Problem]:
    return LinterEngine(config).lint_file(path)


def lint_paths(
    paths: Iterable[Path | str], config: Config | None = None, jobs: int | None = None
) -> list[LintResult]:
    return LinterEngine(config, jobs=jobs).lint_paths(paths)
