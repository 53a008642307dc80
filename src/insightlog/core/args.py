"""Parser de argumentos da linha de comando.

Expõe:
- mensagem a registrar (posicional) e severidade (--level)
- nome da aplicação e diretório de logs (--app-name / --log-dir)
- geração do relatório (--archive) e impressão do diretório (--where)
- verbosidade do logging interno (-v)
"""

import argparse
import os
from typing import Sequence

from ..system.severity import Severity

# ========================
# 0. Configuração do parser e argumentos padrão
# ========================


# Função principal do módulo; cria e retorna o ArgumentParser configurado
def configure_argparser() -> argparse.ArgumentParser:
    """Cria e retorna ArgumentParser configurado para o insightlog."""
    parser = argparse.ArgumentParser(
        prog="insightlog",
        description="Logger de diagnóstico: escreve linhas no log rotativo e gera relatórios compactados",
    )
    parser.add_argument("message", nargs="*", help="Texto a registrar (vazio = nenhuma linha)")
    parser.add_argument(
        "-l",
        "--level",
        type=str,
        default="info",
        help="Severidade da linha: trace, info, notice, warning, error, critical",
    )
    parser.add_argument(
        "--app-name",
        dest="app_name",
        type=str,
        default=None,
        help="Nome da aplicação (substitui INSIGHT_APP_NAME)",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        type=str,
        default=None,
        help="Diretório de logs (substitui INSIGHT_LOG_DIR)",
    )
    parser.add_argument("--archive", action="store_true", help="Gera insight_report.zip e imprime o caminho")
    parser.add_argument("--where", action="store_true", help="Imprime o diretório de logs")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Aumenta a verbosidade do logging interno (-v, -vv)",
    )
    return parser


# ========================
# 1. Análise e validação
# ========================


# Auxilia insightlog.main; criado para analisar argv e validar argumentos
def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Analisa argv e retorna Namespace validado para uso no programa."""
    parser = configure_argparser()
    ns = parser.parse_args(argv)
    try:
        validate_args(ns)
    except ValueError as exc:
        parser.error(str(exc))
    return ns


# Auxilia parse_args; criado para garantir valores corretos
def validate_args(args: argparse.Namespace) -> None:
    """Valida e normaliza argumentos; converte --level em Severity."""
    args.severity = Severity.from_name(args.level)
    args.text = " ".join(args.message or [])
    if args.log_dir:
        args.log_dir = os.path.expanduser(args.log_dir)


# ========================
# 2. Configuração de logging
# ========================


def get_log_level(args: argparse.Namespace) -> str:
    """Retorna o nível do logging interno a partir de -v."""
    v = getattr(args, "verbose", 0) or 0
    if v >= 2:
        return "DEBUG"
    if v == 1:
        return "INFO"
    return "WARNING"
