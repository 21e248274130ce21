"""Domain layer for ecolage: payroll and tuition rules, entities and services."""
