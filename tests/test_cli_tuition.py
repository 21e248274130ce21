"""Tests for tuition commands."""

from ecolage.cli.main import cli


def invoke(cli_runner, store, *args):
    return cli_runner.invoke(cli, ["--db-path", store.database_path, "tuition", *args])


def test_suggest_default(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "suggest", "Inconnue")

    assert result.exit_code == 0
    assert "Classe: Inconnue (default)" in result.output
    assert "Mensualité: 150,000 MGA" in result.output
    assert "Annuel (10 mois): 1,500,000 MGA" in result.output
    assert "Droit d'inscription: 50,000 MGA" in result.output
    assert "Frais d'examen: 25,000 MGA" in result.output


def test_set_then_suggest(cli_runner, temp_store):
    result = invoke(
        cli_runner, temp_store, "set", "GSA", "Maternelle", "155 000 Ar",
        "--exam-fee", "30000", "--effective-date", "2025-09-01",
    )
    assert result.exit_code == 0
    assert "Set tuition for 'GSA' to 155,000 MGA/month (ID: class_gsa)" in result.output

    result = invoke(cli_runner, temp_store, "suggest", "GSA", "--level", "Maternelle")
    assert result.exit_code == 0
    assert "(configured)" in result.output
    assert "Mensualité: 155,000 MGA" in result.output
    assert "Frais d'examen: 30,000 MGA" in result.output


def test_set_invalid_inputs(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "set", "GSA", "Maternelle", "abc")
    assert result.exit_code == 1
    assert "Error: Invalid monthly amount" in result.output

    result = invoke(cli_runner, temp_store, "set", "GSA", "Maternelle", "0")
    assert result.exit_code == 1
    assert "must be positive" in result.output

    result = invoke(cli_runner, temp_store, "set", "GSA", "Maternelle", "150000", "--effective-date", "someday")
    assert result.exit_code == 1
    assert "Error: Invalid effective date" in result.output


def test_list(cli_runner, temp_store, tuition_service):
    result = invoke(cli_runner, temp_store, "list")
    assert result.exit_code == 0
    assert "No tuition amounts configured" in result.output

    tuition_service.set_class_amount("GSA", "Maternelle", 150000)
    tuition_service.set_class_amount("7", "Primaire", 200000)
    tuition_service.deactivate_class_amount("7")

    result = invoke(cli_runner, temp_store, "list")
    assert result.exit_code == 0
    assert "GSA" in result.output
    assert "1,500,000 /an" in result.output
    assert "(inactive)" in result.output


def test_init_defaults(cli_runner, temp_store, tuition_service, sample_classes):
    result = invoke(cli_runner, temp_store, "init-defaults")

    assert result.exit_code == 0
    assert "Initialized default tuition for 3 class(es)" in result.output
    assert tuition_service.get_class_amount("7").monthly_amount == 200000
    assert tuition_service.get_class_amount("Nouvelle classe").monthly_amount == 150000


def test_init_defaults_without_classes(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "init-defaults")
    assert result.exit_code == 0
    assert "No classes found." in result.output


def test_deactivate(cli_runner, temp_store, tuition_service):
    tuition_service.set_class_amount("GSA", "Maternelle", 155000)

    result = invoke(cli_runner, temp_store, "deactivate", "GSA")
    assert result.exit_code == 0
    assert "Deactivated tuition for 'GSA'" in result.output
    assert tuition_service.get_class_amount("GSA").is_active is False


def test_deactivate_unknown(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "deactivate", "Inconnue")
    assert result.exit_code == 1
    assert "Error: No tuition amount configured for class 'Inconnue'" in result.output


def test_settings(cli_runner, temp_store, tuition_service):
    result = invoke(cli_runner, temp_store, "settings")
    assert result.exit_code == 0
    assert "No tuition settings saved." in result.output

    result = invoke(cli_runner, temp_store, "settings", "--monthly", "160 000", "--academic-year", "2025-2026")
    assert result.exit_code == 0
    assert "Année scolaire: 2025-2026" in result.output
    assert "Mensualité par défaut: 160,000 MGA" in result.output
    assert "Droit d'inscription par défaut: 50,000 MGA" in result.output
    assert "mois 9 à 6, 10 mensualités" in result.output

    saved = tuition_service.get_settings()
    assert saved.default_monthly_amount == 160000
    assert saved.default_exam_fee == 25000


def test_set_monthly_only_keeps_exam_fee(cli_runner, temp_store):
    invoke(cli_runner, temp_store, "set", "GSA", "Maternelle", "150000", "--exam-fee", "30000")
    result = invoke(cli_runner, temp_store, "set", "GSA", "Maternelle", "160000")
    assert result.exit_code == 0

    result = invoke(cli_runner, temp_store, "suggest", "GSA")
    assert "Mensualité: 160,000 MGA" in result.output
    assert "Frais d'examen: 30,000 MGA" in result.output
