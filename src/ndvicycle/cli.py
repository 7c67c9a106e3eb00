import argparse
import sys

from ndvicycle.aligner import align_entity
from ndvicycle.config import ChartConfig
from ndvicycle.cycler import Cycler, Scheduler
from ndvicycle.exceptions import NdviCycleError
from ndvicycle.logging import configure_logging, get_logger
from ndvicycle.records import load_entities, load_external
from ndvicycle.viz import PlotlyRenderer

logger = get_logger("cli")


def _load(config: ChartConfig):
    entities = load_entities(config.ndvi_path)
    external = load_external(config.precip_path)
    logger.info("inputs_loaded", n_fields=len(entities), n_precip=len(external))
    return entities, external


def cmd_show(args: argparse.Namespace) -> int:
    try:
        config = ChartConfig.from_toml(args.config)
        entities, external = _load(config)
        series = align_entity(entities, args.field, external)
    except NdviCycleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Field {args.field}: {len(series)} observations")
    print(series.to_frame().to_string())
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    try:
        config = ChartConfig.from_toml(args.config)
        entities, external = _load(config)
        renderer = PlotlyRenderer(config.html_path)
        cycler = Cycler(entities, external, renderer)
        period = args.period_millis if args.period_millis is not None else config.period_millis
        scheduler = Scheduler(cycler.tick, period_millis=period, on_error=config.on_error)
        cycler.start()
    except NdviCycleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        fired = scheduler.run(max_ticks=args.ticks)
    except NdviCycleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        scheduler.stop()
        fired = scheduler.fired

    print(f"Cycled {fired} ticks; last field index {cycler.current_index}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ndvicycle",
        description="Cycle per-field NDVI against precipitation on a timer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging threshold",
    )
    p.add_argument(
        "--log-format",
        default="console",
        choices=["console", "json"],
        help="Log output format",
    )
    sub = p.add_subparsers(dest="command")

    def add_common(sp):
        sp.add_argument("config", help="Path to chart TOML")

    # show
    ps = sub.add_parser(
        "show",
        help="Print one field's aligned NDVI and precipitation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_common(ps)
    ps.add_argument("--field", type=int, default=0, help="Field index to align")
    ps.set_defaults(func=cmd_show)

    # run
    pr = sub.add_parser(
        "run",
        help="Draw field 0, then cycle through fields on the configured period",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_common(pr)
    pr.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop after this many ticks; default runs until interrupted",
    )
    pr.add_argument(
        "--period-millis",
        type=int,
        default=None,
        help="Override schedule.period_millis from the TOML",
    )
    pr.set_defaults(func=cmd_run)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        import importlib.metadata as importlib_metadata
        try:
            ver = importlib_metadata.version("ndvicycle")
        except importlib_metadata.PackageNotFoundError:
            ver = "unknown"
        print(ver)
        return 0
    if not getattr(args, "func", None):
        parser.print_help()
        return 2
    configure_logging(level=args.log_level, format=args.log_format)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
