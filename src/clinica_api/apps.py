from django.apps import AppConfig


class ClinicaConfig(AppConfig):
    name = "clinica_api"
    verbose_name = "Gestão Clínica"

    def ready(self):
        from django.conf import settings

        # ─── DI containers ──────────────────────────────────────────
        from odonto_core.adapters.config.composition_root import (
            setup_di_container_from_settings as build_core_container,
        )

        from clinical_attendance.adapters.config.composition_root import (
            setup_di_container_from_settings as build_attendance_container,
        )

        build_core_container(settings)
        build_attendance_container(settings)
