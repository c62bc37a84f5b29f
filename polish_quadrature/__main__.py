"""
Command line interface.

    python -m polish_quadrature "(* pi (sqr x))" --eval 2
    python -m polish_quadrature "(sin x)" --from 0 --to 3.14159 --order 4 --grain fine
"""
import argparse
import sys
from typing import List, Optional

from .config import IntegralConfig, Grain
from .errors import ConfigurationError, EvaluationError, IntegrationCancelled, ParseError
from .integrator import Integral
from .logging_system import LogLevel, configure_logging
from .parser import parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polish-quadrature",
        description="Evaluate and integrate formulas written in prefix notation")
    parser.add_argument("formula", help='Formula, e.g. "(+ (sin x) (sqr x))"')
    parser.add_argument("-v", "--variable", default="x", help="Free variable symbol (default: x)")
    parser.add_argument("--eval", dest="points", type=float, action="append", default=[],
                        metavar="X", help="Print the value at X (repeatable)")
    parser.add_argument("--from", dest="x_from", type=float, help="Lower integration limit")
    parser.add_argument("--to", dest="x_to", type=float, help="Upper integration limit")
    parser.add_argument("--order", default="2", help="Newton-Cotes order 0-5 (default: 2)")
    parser.add_argument("--grain", default="coarse",
                        help=f"Sub-intervals: {', '.join(g.name.lower() for g in Grain)} "
                             f"or a positive integer (default: coarse)")
    parser.add_argument("--workers", type=int, default=1, help="Threads evaluating batches")
    parser.add_argument("--chunk-size", type=int, default=8192, help="Sub-intervals per batch")
    parser.add_argument("--symbolic", action="store_true", help="Print the SymPy form")
    parser.add_argument("--tree", action="store_true", help="Print the node arena")
    parser.add_argument("--log-level", default="minimal",
                        choices=[level.name.lower() for level in LogLevel],
                        help="Logging verbosity (default: minimal)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(LogLevel.from_name(args.log_level))

    if (args.x_from is None) != (args.x_to is None):
        parser.error("--from and --to must be given together")

    try:
        tree = parse(args.formula, args.variable)
        config = IntegralConfig.from_names(args.order, args.grain,
                                           chunk_size=args.chunk_size, workers=args.workers)
    except (ParseError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.tree:
        for index, node in enumerate(tree):
            label = node.token(tree.variable)
            children = f" -> {list(node.children)}" if node.children else ""
            print(f"{index:4d}  {node.kind.name:<8} {label}{children}")
    if args.symbolic:
        print(tree.to_sympy())

    try:
        for x in args.points:
            print(f"f({x!r}) = {tree.evaluate(x)!r}")
        if args.x_from is not None:
            integral = Integral(tree, config=config)
            print(repr(integral.integrate(args.x_from, args.x_to)))
    except (EvaluationError, IntegrationCancelled) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
