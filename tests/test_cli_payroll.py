"""Tests for payroll commands."""

from ecolage.cli.main import cli


def test_salary(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "salary", "500000"])

    assert result.exit_code == 0
    assert "Salaire brut" in result.output
    assert "500,000 MGA" in result.output
    assert "11,500 MGA" in result.output
    assert "478,500 MGA" in result.output
    assert "590,000 MGA" in result.output
    assert "Cotisations salariales" in result.output
    assert "10,000 MGA" in result.output


def test_salary_with_allowances_and_detail(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_store.database_path,
            "payroll", "salary", "800 000",
            "--transport", "50 000 Ar",
            "--meal", "30000",
            "--detail",
        ],
    )

    assert result.exit_code == 0
    assert "880,000 MGA" in result.output
    assert "782,420 MGA" in result.output
    assert "Calcul IRSA détaillé:" in result.output
    assert "IRSA Total: 79,980 MGA" in result.output


def test_salary_invalid_amount(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "salary", "beaucoup"])
    assert result.exit_code == 1
    assert "Error: Invalid base salary" in result.output


def test_irsa(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "irsa", "450000"])
    assert result.exit_code == 0
    assert "IRSA Total: 7,500 MGA" in result.output


def test_bareme(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "bareme"])
    assert result.exit_code == 0
    assert "Exonéré" in result.output
    assert "20%" in result.output
    assert "Minimum de perception: 2,000 MGA" in result.output


def test_words(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "words", "2350000"])
    assert result.exit_code == 0
    assert "2 millions 350 mille ariary exactement" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "words", "150 500 Ar"])
    assert "150 mille 500 ariary" in result.output


def test_bulk_active_employees(cli_runner, temp_store, sample_employees):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "bulk"])

    assert result.exit_code == 0
    assert "Rija Rakoto" in result.output
    assert "Voahangy Rabe" in result.output
    assert "Hery Randria" not in result.output
    assert "draft" in result.output
    assert "Total net: 1,355,000 MGA" in result.output


def test_bulk_all_employees(cli_runner, temp_store, sample_employees):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "bulk", "--all"])
    assert result.exit_code == 0
    assert "Hery Randria" in result.output


def test_bulk_without_employees(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "bulk"])
    assert result.exit_code == 0
    assert "No employees found." in result.output


def test_db_path_from_environment(cli_runner, temp_store, sample_employees, monkeypatch):
    monkeypatch.setenv("ECOLAGE_DB_PATH", temp_store.database_path)
    result = cli_runner.invoke(cli, ["payroll", "bulk"])
    assert result.exit_code == 0
    assert "Rija Rakoto" in result.output


def test_help_does_not_open_store(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"
    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])
    assert result.exit_code == 0
    assert "payroll" in result.output
    assert not db_path.exists()


def test_package_exposes_main():
    import ecolage
    from ecolage.cli.main import main

    assert ecolage.main is main


def test_words_very_large_amount(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "words", "1e40"])
    assert result.exit_code == 0
    assert result.output.strip().endswith("millions ariary exactement")


def test_salary_very_large_amount(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "payroll", "salary", "1e30"])
    assert result.exit_code == 0
    assert "Salaire net" in result.output
    assert "Cotisations salariales" in result.output
