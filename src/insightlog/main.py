"""Ponto de entrada da linha de comando do insightlog.

Configura o logging, constrói um ``InsightCenter`` com as opções da CLI,
registra a mensagem recebida e, se pedido, gera o relatório compactado.
"""

import logging as _logging
import sys

from .config.settings import get_settings
from .core.args import get_log_level, parse_args
from .core.center import InsightCenter


def main(argv: list[str] | None = None) -> int:
    """Executa a CLI e retorna o código de saída.

    Retorna 1 quando ``--archive`` foi pedido e nenhum relatório foi gerado.
    """
    args = parse_args(argv)

    level = getattr(_logging, get_log_level(args), _logging.WARNING)
    _logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = get_settings({"app_name": args.app_name, "log_dir": args.log_dir})
    with InsightCenter(settings=settings) as center:
        if args.where:
            print(center.log_directory)
        if args.text:
            center.log(args.severity, args.text)
        if args.archive:
            artifact = center.make_archive()
            if artifact is None:
                print("Falha ao gerar relatório", file=sys.stderr)
                return 1
            print(artifact)
    return 0


if __name__ == "__main__":
    sys.exit(main())
