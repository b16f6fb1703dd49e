import logging

from ketaring.bootstrap.config.loader import get_cli_args
from ketaring.bootstrap.deps import get_dispatcher, get_model, get_renderer
from ketaring.core.errors import KetaringError
from ketaring.core.helpers.utils import setup_logging, scan


@scan("ketaring.bootstrap.commands")
def main():
    args = get_cli_args()
    setup_logging(args.log_level)

    try:
        result = get_dispatcher().dispatch(
            args.command,
            model=get_model(),
            namespace=args
        )
    except KetaringError as ex:
        logging.getLogger("bootstrap.cli").error(f"{type(ex).__name__}: {ex}")
        raise SystemExit(1)

    print(get_renderer(args.output).render(result))


if __name__ == "__main__":
    main()
