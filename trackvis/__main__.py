"""Command line renderer: draw all track parameters of a JSON file to OBJ or PLY.

    python -m trackvis events.json -o out/tracks.obj --momentum-scale 10
"""

import argparse
import logging
import sys

from trackvis.context import GeometryContext, RunContext
from trackvis.data import load_parameters
from trackvis.visualization import EventDataViewConfig, draw_with_config, make_sink

logger = logging.getLogger('trackvis')


def build_parser() -> argparse.ArgumentParser:
    defaults = EventDataViewConfig()
    parser = argparse.ArgumentParser(
        prog='trackvis',
        description='Render track parameters and their uncertainties.')
    parser.add_argument('input', help='JSON file written by trackvis.data.save_parameters')
    parser.add_argument('-o', '--output', required=True, help='Output file')
    parser.add_argument('--format', choices=['obj', 'ply'], default='obj')
    parser.add_argument('--lseg', type=int, default=defaults.lseg,
                        help='Segments per ellipse / ring')
    parser.add_argument('--momentum-scale', type=float, default=defaults.momentum_scale)
    parser.add_argument('--loc-error-scale', type=float, default=defaults.loc_error_scale)
    parser.add_argument('--angular-error-scale', type=float,
                        default=defaults.angular_error_scale)
    parser.add_argument('--no-surface', action='store_true',
                        help='Do not draw the reference surfaces')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    config = EventDataViewConfig(
        lseg=args.lseg,
        momentum_scale=args.momentum_scale,
        loc_error_scale=args.loc_error_scale,
        angular_error_scale=args.angular_error_scale,
        draw_parameter_surface=not args.no_surface,
    )
    events, meta = load_parameters(args.input)
    sink = make_sink(args.format)
    gctx = GeometryContext()

    run = RunContext()
    run.begin_run()
    for event in events:
        number = run.begin_event()
        logger.debug("Event %d: %d parameter sets", number, len(event))
        for pars in event:
            draw_with_config(sink, pars, gctx, config)
        run.record_draw(len(event))
    summary = run.end_run()

    path = sink.write(args.output)
    print(f"{summary['drawn']} parameter sets from {summary['events']} events -> {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
