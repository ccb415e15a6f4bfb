"""Utility script to create an initial user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from helpdesk.application.use_cases.users import create_user
from helpdesk.domain.entities import ROLE_ADMIN, ROLES
from helpdesk.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the Helpdesk API application.",
    )
    parser.add_argument(
        "--name",
        default="Administrador",
        help="Nome completo do utilizador (por omissão: Administrador)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email do utilizador (por omissão: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=ROLES,
        type=str.upper,
        help="Perfil do utilizador (por omissão: ADMIN)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Palavra-passe do utilizador. Se não for indicada será pedida interativamente.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Introduza a palavra-passe do utilizador: ")
    if not password:
        raise SystemExit("Não foi indicada uma palavra-passe válida.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Não foi possível criar o utilizador: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Erro ao guardar o utilizador na base de dados: {exc}") from exc
    else:
        print(
            "Utilizador criado com sucesso:\n"
            f"  ID: {user.id}\n"
            f"  Nome: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Perfil: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
