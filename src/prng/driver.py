"""Driver — CLI генератора на безопасных простых Софи Жермен.

    python -m src.prng num_observations seed [--profile test] [--config FILE]

stdout: наблюдения, по одному в строке ("0." + цифры).
stderr: заголовок, прогресс поиска, usage, диагностика.

Коды возврата:
- 0: успех (в том числе num_observations == 0)
- 1: невалидные аргументы (usage) или дефект конфигурации
"""

import argparse
import json
import logging
import os
import sys
from typing import Final, Optional, Sequence

from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError as ModelValidationError

from src.core.contracts.validators import load_generator_config
from src.core.domain.config import (
    ConfigProfile,
    ConfigurationError,
    GeneratorConfig,
    ensure_valid_configuration,
    get_profile_config,
)
from src.core.domain.request import InputValidationError
from src.core.math.fixed_width import FixedWidthOverflow
from src.prng.observation_generator import ObservationGenerator

logger = logging.getLogger(__name__)

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1

BANNER: Final[str] = "PRNG Based on Sophie-Germain primes"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser, который не завершает процесс при ошибке."""

    def error(self, message: str):
        raise InputValidationError(message)


def parse_num(text: str) -> int:
    """Строгий разбор неотрицательного десятичного числа.

    Допускаются только ASCII цифры: без знака, пробелов и хвостового мусора.

    Raises:
        InputValidationError: если строка не является числом целиком
    """
    if not text or not (text.isascii() and text.isdigit()):
        raise InputValidationError(f"not a non-negative decimal integer: {text!r}")
    try:
        return int(text)
    except ValueError as e:
        # Предел длины строки при преобразовании в int (sys.set_int_max_str_digits)
        raise InputValidationError(f"number too long: {len(text)} digits") from e


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        description="Generates an uniform sample using a pseudorandom number "
        "generator based on Sophie-Germain safe primes.",
        add_help=False,
    )
    parser.add_argument("values", nargs="*", help="num_observations seed")
    parser.add_argument(
        "--profile",
        choices=[p.value for p in ConfigProfile],
        default=ConfigProfile.PRODUCTION.value,
        help="Named parameter set (default: production)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file with generator parameters (overrides --profile)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report errors on stderr"
    )
    return parser


def usage_profile(argv: Optional[Sequence[str]]) -> str:
    """Профиль для usage, когда полный разбор аргументов не удался.

    Разбирается только --profile; остальные аргументы игнорируются.
    Недопустимое значение профиля даёт production.
    """
    parser = _ArgumentParser(add_help=False)
    parser.add_argument(
        "--profile",
        choices=[p.value for p in ConfigProfile],
        default=ConfigProfile.PRODUCTION.value,
    )
    try:
        known, _ = parser.parse_known_args(argv)
    except InputValidationError:
        return ConfigProfile.PRODUCTION.value
    return known.profile


def print_usage(prog: str, config: GeneratorConfig) -> None:
    print(f"Usage: {prog} num_observations seed", file=sys.stderr)
    print(f"    (where num_observations <= {config.max_observations})", file=sys.stderr)
    print(f"    (where seed <= {config.max_seed})", file=sys.stderr)


def configure_logging(quiet: bool = False) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """Конфигурация из --config или --profile, с проверкой инвариантов.

    Raises:
        ConfigurationError: если файл не читается, не проходит схему
            или нарушает инварианты переполнения
    """
    if args.config is None:
        config = get_profile_config(args.profile)
    else:
        try:
            config = load_generator_config(args.config)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read config {args.config}: {e}") from e
        except SchemaValidationError as e:
            raise ConfigurationError(
                f"Config {args.config} violates generator_config schema: {e.message}"
            ) from e
        except ModelValidationError as e:
            raise ConfigurationError(f"Invalid config {args.config}: {e}") from e

    return ensure_valid_configuration(config)


def main(argv: Optional[Sequence[str]] = None, prog: Optional[str] = None) -> int:
    """Точка входа CLI. Возвращает код завершения."""
    prog = prog or "sophie-prng"
    parser = build_parser(prog)

    try:
        args = parser.parse_args(argv)
    except InputValidationError:
        print_usage(prog, get_profile_config(usage_profile(argv)))
        return EXIT_FAILURE

    configure_logging(args.quiet)

    try:
        config = resolve_config(args)
    except ConfigurationError as e:
        logger.critical("%s", e)
        return EXIT_FAILURE

    logger.info(BANNER)
    logger.info("-" * len(BANNER))

    try:
        if len(args.values) != 2:
            raise InputValidationError(
                f"expected 2 arguments, got {len(args.values)}"
            )
        num_observations = parse_num(args.values[0])
        seed = parse_num(args.values[1])
        observations = ObservationGenerator(config).generate(num_observations, seed)
    except InputValidationError as e:
        logger.debug("Invalid arguments: %s", e)
        print_usage(prog, config)
        return EXIT_FAILURE
    except (ConfigurationError, FixedWidthOverflow) as e:
        logger.critical("%s", e)
        return EXIT_FAILURE

    for observation in observations:
        print(observation)

    return EXIT_SUCCESS


def run() -> None:
    sys.exit(main(prog=os.path.basename(sys.argv[0])))


if __name__ == "__main__":
    run()
