"""
Ciclo de vida do atendimento pela fachada `AttendanceService`.

CHECKED_IN → IN_PROGRESS → DONE, cancelamento, dados clínicos,
prontuário gerado na finalização e isolamento entre clínicas.
"""
from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from clinical_attendance.core.domain.entities.attendance_entity import AttendanceStatus
from odonto_core.adapters.observability.metrics import registry
from plugins.django_interface.models import (
    Attendance,
    AttendanceCID,
    AttendanceProcedure,
    Cid,
    Procedure,
    Record,
    User,
)
from tests.helpers.builders import (
    attendance_container,
    link_procedure,
    make_appointment,
    make_clinic,
    make_dentist,
    make_patient,
    make_procedure,
    make_user,
    session_for,
)


class AttendanceLifecycleTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.receptionist = make_user(cls.clinic, role=User.Role.RECEPTIONIST)
        cls.dentist = make_dentist(cls.clinic)
        cls.other_dentist = make_dentist(cls.clinic)
        cls.patient = make_patient(cls.clinic, name="Maria Souza")
        cls.procedure = make_procedure(cls.clinic, name="Restauração em resina", base_value=Decimal("180.00"))
        link_procedure(cls.dentist, cls.procedure)

        cls.foreign_clinic = make_clinic("Clínica Vizinha")
        cls.foreign_owner = make_user(cls.foreign_clinic, role=User.Role.OWNER)
        cls.foreign_patient = make_patient(cls.foreign_clinic)

    def setUp(self):
        self.service = attendance_container().attendance_service()
        self.owner_session = session_for(self.owner)
        self.dentist_session = session_for(self.dentist.user)

    # ───────────────────────────────────────────────
    # helpers
    # ───────────────────────────────────────────────
    def _check_in(self, session=None, **data):
        payload = {"patient_id": str(self.patient.id), **data}
        result = self.service.check_in_attendance(session or self.owner_session, payload)
        self.assertTrue(result.success, result.error)
        return result.data

    def _in_progress(self, **data):
        attendance = self._check_in(**data)
        result = self.service.start_attendance(
            self.dentist_session, attendance.id, {"dentist_id": str(self.dentist.id)}
        )
        self.assertTrue(result.success, result.error)
        return result.data

    def _add_cid(self, attendance, code="K02.1"):
        return self.service.add_attendance_cid(
            self.dentist_session, attendance.id, {"cid_code": code, "description": "Cárie da dentina"}
        )

    def _add_procedure(self, attendance, **data):
        payload = {
            "procedure_id": str(self.procedure.id),
            "tooth": "16",
            "faces": ["O", "M"],
            "clinical_status": "RESTAURADO",
            **data,
        }
        return self.service.add_attendance_procedure(self.dentist_session, attendance.id, payload)

    def _ready_to_finish(self, **data):
        attendance = self._in_progress(**data)
        self.assertTrue(self._add_cid(attendance).success)
        self.assertTrue(self._add_procedure(attendance).success)
        return attendance

    def _finished(self, **data):
        attendance = self._ready_to_finish(**data)
        result = self.service.finish_attendance(self.dentist_session, attendance.id)
        self.assertTrue(result.success, result.error)
        return result.data

    def _orm_attendance(self, status, arrival_at, clinic=None, patient=None, **extra):
        return Attendance.objects.create(
            clinic=clinic or self.clinic,
            patient=patient or self.patient,
            status=status,
            arrival_at=arrival_at,
            **extra,
        )

    # ───────────────────────────────────────────────
    # check-in
    # ───────────────────────────────────────────────
    def test_check_in_uses_appointment_dentist_when_none_given(self):
        appointment = make_appointment(self.clinic, self.patient, self.other_dentist)

        attendance = self._check_in(appointment_id=str(appointment.id))

        self.assertEqual(attendance.status, AttendanceStatus.CHECKED_IN)
        self.assertEqual(attendance.status_label, "Check-in")
        self.assertEqual(attendance.dentist_id, self.other_dentist.id)
        self.assertEqual(attendance.appointment_id, appointment.id)
        self.assertEqual(attendance.created_by_id, self.owner.id)
        self.assertEqual(attendance.created_by_role, "OWNER")
        self.assertIsNotNone(attendance.arrival_at)
        self.assertEqual(attendance.patient["name"], "Maria Souza")

    def test_receptionist_can_check_in(self):
        attendance = self._check_in(session=session_for(self.receptionist))
        self.assertEqual(attendance.created_by_role, "RECEPTIONIST")

    def test_check_in_rejects_inactive_patient(self):
        inactive = make_patient(self.clinic, is_active=False)

        result = self.service.check_in_attendance(self.owner_session, {"patient_id": str(inactive.id)})

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Paciente não encontrado ou inativo")

    def test_check_in_rejects_patient_from_another_clinic(self):
        result = self.service.check_in_attendance(
            self.owner_session, {"patient_id": str(self.foreign_patient.id)}
        )
        self.assertEqual(result.error, "Paciente não encontrado ou inativo")

    def test_check_in_rejects_unknown_appointment(self):
        result = self.service.check_in_attendance(
            self.owner_session,
            {"patient_id": str(self.patient.id), "appointment_id": str(uuid.uuid4())},
        )
        self.assertEqual(result.error, "Agendamento não encontrado")

    def test_check_in_conflicts_with_active_attendance_of_same_appointment(self):
        appointment = make_appointment(self.clinic, self.patient, self.dentist)
        self._in_progress(appointment_id=str(appointment.id))

        result = self.service.check_in_attendance(
            self.owner_session,
            {"patient_id": str(self.patient.id), "appointment_id": str(appointment.id)},
        )

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Este agendamento já possui um atendimento em andamento")
        self.assertEqual(Attendance.objects.filter(clinic=self.clinic).count(), 1)

    def test_check_in_detaches_closed_attendance_from_appointment(self):
        appointment = make_appointment(self.clinic, self.patient, self.dentist)
        stale = self._orm_attendance(
            AttendanceStatus.DONE,
            timezone.now() - timedelta(days=1),
            appointment=appointment,
            dentist=self.dentist,
        )

        attendance = self._check_in(appointment_id=str(appointment.id))

        stale.refresh_from_db()
        self.assertIsNone(stale.appointment_id)
        self.assertEqual(attendance.appointment_id, appointment.id)

    def test_check_in_rejects_malformed_payload(self):
        result = self.service.check_in_attendance(self.owner_session, {"patient_id": "não-é-uuid"})
        self.assertFalse(result.success)
        self.assertTrue(result.error.startswith("Dados inválidos: "))

    # ───────────────────────────────────────────────
    # start
    # ───────────────────────────────────────────────
    def test_start_moves_to_in_progress_with_dentist(self):
        attendance = self._in_progress()

        self.assertEqual(attendance.status, AttendanceStatus.IN_PROGRESS)
        self.assertEqual(attendance.dentist_id, self.dentist.id)
        self.assertIsNotNone(attendance.started_at)
        self.assertEqual(attendance.dentist["cro"], self.dentist.cro)

    def test_start_only_from_checked_in(self):
        attendance = self._in_progress()

        result = self.service.start_attendance(
            self.dentist_session, attendance.id, {"dentist_id": str(self.dentist.id)}
        )

        self.assertEqual(result.error, "Apenas atendimentos em check-in podem ser iniciados")

    def test_dentist_cannot_start_with_another_dentist_profile(self):
        attendance = self._check_in()

        result = self.service.start_attendance(
            self.dentist_session, attendance.id, {"dentist_id": str(self.other_dentist.id)}
        )

        self.assertEqual(result.error, "Dentista não encontrado ou não autorizado")
        current = self.service.get_attendance(self.owner_session, attendance.id).data
        self.assertEqual(current.status, AttendanceStatus.CHECKED_IN)

    def test_owner_may_start_for_any_dentist_of_the_clinic(self):
        attendance = self._check_in()

        result = self.service.start_attendance(
            self.owner_session, attendance.id, {"dentist_id": str(self.other_dentist.id)}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.dentist_id, self.other_dentist.id)

    def test_owner_start_with_unknown_dentist(self):
        attendance = self._check_in()

        result = self.service.start_attendance(
            self.owner_session, attendance.id, {"dentist_id": str(uuid.uuid4())}
        )

        self.assertEqual(result.error, "Dentista não encontrado")

    # ───────────────────────────────────────────────
    # dados clínicos
    # ───────────────────────────────────────────────
    def test_clinical_data_requires_started_attendance(self):
        attendance = self._check_in()

        self.assertEqual(
            self._add_cid(attendance).error,
            "CID só pode ser adicionado em atendimentos em andamento ou finalizados",
        )
        self.assertEqual(
            self._add_procedure(attendance).error,
            "Procedimento só pode ser adicionado em atendimentos em andamento ou finalizados",
        )
        result = self.service.update_attendance_odontogram(
            self.dentist_session, attendance.id, {"data": {"16": "CARIE"}}
        )
        self.assertEqual(
            result.error, "Odontograma só pode ser atualizado em atendimentos em andamento ou finalizados"
        )

    def test_cid_category_comes_from_catalog(self):
        Cid.objects.create(code="K02.1", description="Cárie da dentina", category="Doenças da cavidade oral")
        attendance = self._in_progress()

        self._add_cid(attendance, "K02.1")
        result = self._add_cid(attendance, "Z01.2")

        self.assertTrue(result.success, result.error)
        first, second = result.data.cids
        self.assertEqual(first.cid_code, "K02.1")
        self.assertEqual(first.category, "Doenças da cavidade oral")
        self.assertEqual(first.created_by_dentist_id, self.dentist.id)
        self.assertIsNone(second.category)

    def test_cid_category_matches_catalog_code_stored_unnormalized(self):
        Cid.objects.create(code=" k02.0 ", description="Cárie limitada ao esmalte", category="Cárie Dentária")
        attendance = self._in_progress()

        result = self._add_cid(attendance, "K02.0")

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.cids[0].category, "Cárie Dentária")

    def test_cid_code_format_is_validated(self):
        attendance = self._in_progress()

        result = self._add_cid(attendance, "K2")

        self.assertEqual(
            result.error, "Dados inválidos: Código CID deve ter formato válido (ex: K02.0, Z01.2)"
        )

    def test_procedure_price_is_snapshotted(self):
        attendance = self._in_progress()

        result = self._add_procedure(attendance)
        Procedure.objects.filter(id=self.procedure.id).update(base_value=Decimal("250.00"))
        current = self.service.get_attendance(self.owner_session, attendance.id).data

        self.assertTrue(result.success, result.error)
        (procedure,) = current.procedures
        self.assertEqual(procedure.price, Decimal("180.00"))
        self.assertEqual(procedure.description, "Restauração em resina")
        self.assertEqual(procedure.dentist_id, self.dentist.id)
        self.assertEqual(procedure.faces, ["O", "M"])
        self.assertEqual(procedure.procedure["name"], "Restauração em resina")

    def test_procedure_must_be_linked_to_effective_dentist(self):
        unlinked = make_procedure(self.clinic, name="Clareamento")
        attendance = self._in_progress()

        result = self._add_procedure(attendance, procedure_id=str(unlinked.id))

        self.assertEqual(result.error, "Procedimento não está vinculado a este dentista")

    def test_attendance_dentist_wins_over_caller(self):
        attendance = self._in_progress()

        result = self.service.add_attendance_procedure(
            self.owner_session,
            attendance.id,
            {"procedure_id": str(self.procedure.id), "tooth": "21", "faces": ["O"], "clinical_status": "CARIE"},
            caller_dentist_id=self.other_dentist.id,
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.procedures[0].dentist_id, self.dentist.id)

    def test_inactive_procedure_is_rejected(self):
        inactive = make_procedure(self.clinic, is_active=False)
        link_procedure(self.dentist, inactive)
        attendance = self._in_progress()

        result = self._add_procedure(attendance, procedure_id=str(inactive.id))

        self.assertEqual(result.error, "Procedimento não encontrado ou inativo")

    def test_tooth_must_follow_fdi_notation(self):
        attendance = self._in_progress()

        result = self._add_procedure(attendance, tooth="19")

        self.assertEqual(result.error, "Dados inválidos: Dente deve estar entre 11-18, 21-28, 31-38, 41-48")

    def test_tooth_is_required(self):
        attendance = self._in_progress()
        payload = {"procedure_id": str(self.procedure.id), "faces": ["O"], "clinical_status": "CARIE"}

        result = self.service.add_attendance_procedure(self.dentist_session, attendance.id, payload)

        self.assertEqual(result.error, "Dados inválidos: Campo obrigatório: tooth")
        self.assertFalse(AttendanceProcedure.objects.filter(attendance_id=attendance.id).exists())

    def test_at_least_one_face_is_required(self):
        attendance = self._in_progress()

        result = self._add_procedure(attendance, faces=[])

        self.assertEqual(result.error, "Dados inválidos: Selecione pelo menos uma face")

    def test_remove_procedure_deletes_row(self):
        attendance = self._in_progress()
        procedure_id = self._add_procedure(attendance).data.procedures[0].id

        result = self.service.remove_attendance_procedure(self.dentist_session, attendance.id, procedure_id)
        again = self.service.remove_attendance_procedure(self.dentist_session, attendance.id, procedure_id)

        self.assertTrue(result.success, result.error)
        self.assertIsNone(result.data)
        self.assertFalse(AttendanceProcedure.objects.filter(id=procedure_id).exists())
        self.assertEqual(again.error, "Procedimento não encontrado neste atendimento")

    def test_odontogram_is_replaced_as_a_whole(self):
        attendance = self._in_progress()

        self.service.update_attendance_odontogram(
            self.dentist_session, attendance.id, {"data": {"16": "CARIE", "21": "SAUDAVEL"}}
        )
        result = self.service.update_attendance_odontogram(
            self.dentist_session, attendance.id, {"data": {"11": "AUSENTE"}}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.odontogram, {"data": {"11": "AUSENTE"}})

    # ───────────────────────────────────────────────
    # finish
    # ───────────────────────────────────────────────
    def test_finish_requires_cid_even_with_procedures(self):
        attendance = self._in_progress()
        self._add_procedure(attendance)

        result = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertEqual(result.error, "É necessário adicionar pelo menos um CID antes de finalizar")
        self.assertFalse(Record.objects.filter(attendance_id=attendance.id).exists())

    def test_finish_requires_procedure(self):
        attendance = self._in_progress()
        self._add_cid(attendance)

        result = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertEqual(result.error, "É necessário adicionar pelo menos um procedimento antes de finalizar")

    def test_finish_requires_attendance_dentist(self):
        attendance = self._orm_attendance(
            AttendanceStatus.IN_PROGRESS, timezone.now(), started_at=timezone.now()
        )
        AttendanceCID.objects.create(
            attendance=attendance,
            cid_code="K02.1",
            description="Cárie da dentina",
            created_by_dentist=self.dentist,
        )
        AttendanceProcedure.objects.create(
            attendance=attendance,
            procedure=self.procedure,
            tooth="16",
            faces=["O"],
            clinical_status="RESTAURADO",
            price=Decimal("180.00"),
            dentist=self.dentist,
        )

        result = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertEqual(result.error, "Atendimento deve ter um dentista associado")
        attendance.refresh_from_db()
        self.assertEqual(attendance.status, AttendanceStatus.IN_PROGRESS)
        self.assertFalse(Record.objects.filter(attendance_id=attendance.id).exists())

    def test_finish_only_from_in_progress(self):
        attendance = self._check_in()

        result = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertEqual(result.error, "Apenas atendimentos em andamento podem ser finalizados")

    def test_finish_creates_exactly_one_record(self):
        attendance = self._ready_to_finish()
        self.service.update_attendance_odontogram(
            self.dentist_session, attendance.id, {"data": {"16": "RESTAURADO"}}
        )

        result = self.service.finish_attendance(self.dentist_session, attendance.id)
        second = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.status, AttendanceStatus.DONE)
        self.assertIsNotNone(result.data.finished_at)
        self.assertEqual(second.error, "Apenas atendimentos em andamento podem ser finalizados")

        (record,) = Record.objects.filter(attendance_id=attendance.id)
        day = timezone.localtime(result.data.arrival_at).strftime("%d/%m/%Y")
        self.assertEqual(
            record.description,
            f"Atendimento realizado em {day}.\nCIDs: K02.1\nProcedimentos: Restauração em resina",
        )
        self.assertEqual(
            record.procedures,
            [{"code": str(self.procedure.id), "description": "Restauração em resina", "tooth": "16"}],
        )
        self.assertEqual(record.odontogram, {"16": "RESTAURADO"})
        self.assertEqual(record.dentist_id, self.dentist.id)
        self.assertEqual(record.patient_id, self.patient.id)

    def test_walk_in_visit_from_check_in_to_record(self):
        Cid.objects.create(code="S03.2", description="Luxação dentária", category="Traumatismo Dentário")
        attendance = self._in_progress()
        self.assertIsNone(attendance.appointment_id)

        cid = self.service.add_attendance_cid(
            self.dentist_session, attendance.id, {"cid_code": "S03.2", "description": "Luxação dentária"}
        )
        procedure = self._add_procedure(attendance, tooth="11", faces=["O", "V"])
        finished = self.service.finish_attendance(self.dentist_session, attendance.id)

        self.assertTrue(cid.success, cid.error)
        self.assertTrue(procedure.success, procedure.error)
        self.assertTrue(finished.success, finished.error)
        fetched = self.service.get_attendance(self.owner_session, attendance.id).data
        self.assertEqual(fetched.status, AttendanceStatus.DONE)
        self.assertEqual(fetched.cids[0].category, "Traumatismo Dentário")
        self.assertEqual(fetched.procedures[0].faces, ["O", "V"])
        self.assertTrue(Record.objects.filter(attendance_id=attendance.id, clinic=self.clinic).exists())

    def test_clinical_data_still_accepted_after_finish(self):
        attendance = self._finished()

        result = self._add_cid(attendance, "Z01.2")

        self.assertTrue(result.success, result.error)
        self.assertEqual(len(result.data.cids), 2)

    # ───────────────────────────────────────────────
    # cancel
    # ───────────────────────────────────────────────
    def test_cancel_from_checked_in_releases_appointment(self):
        appointment = make_appointment(self.clinic, self.patient, self.dentist)
        attendance = self._check_in(appointment_id=str(appointment.id))

        result = self.service.cancel_attendance(self.owner_session, attendance.id, {"reason": "Desistiu"})

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.status, AttendanceStatus.CANCELED)
        self.assertIsNone(result.data.appointment_id)
        # o agendamento volta a aceitar check-in
        self._check_in(appointment_id=str(appointment.id))

    def test_cancel_from_in_progress(self):
        attendance = self._in_progress()

        result = self.service.cancel_attendance(self.owner_session, attendance.id)

        self.assertEqual(result.data.status, AttendanceStatus.CANCELED)

    def test_cancel_rejects_closed_attendances_with_distinct_messages(self):
        done = self._finished()
        canceled = self._check_in()
        self.service.cancel_attendance(self.owner_session, canceled.id)

        self.assertEqual(
            self.service.cancel_attendance(self.owner_session, done.id).error,
            "Não é possível cancelar um atendimento já finalizado",
        )
        self.assertEqual(
            self.service.cancel_attendance(self.owner_session, canceled.id).error,
            "Atendimento já está cancelado",
        )

    def test_no_show_holds_appointment_until_canceled(self):
        appointment = make_appointment(self.clinic, self.patient, self.dentist)
        no_show = self._orm_attendance(
            AttendanceStatus.NO_SHOW,
            timezone.now() - timedelta(hours=2),
            appointment=appointment,
            dentist=self.dentist,
        )
        payload = {"patient_id": str(self.patient.id), "appointment_id": str(appointment.id)}

        # violação de unicidade traduzida, sem vazar erro interno
        blocked = self.service.check_in_attendance(self.owner_session, payload)
        self.assertFalse(blocked.success)
        self.assertEqual(
            blocked.error,
            "Este agendamento já possui um atendimento. Por favor, cancele o atendimento anterior primeiro.",
        )

        canceled = self.service.cancel_attendance(self.owner_session, no_show.id)
        self.assertTrue(canceled.success, canceled.error)
        self.assertEqual(canceled.data.status, AttendanceStatus.CANCELED)
        self.assertIsNone(canceled.data.appointment_id)

        attendance = self._check_in(appointment_id=str(appointment.id))
        self.assertEqual(attendance.appointment_id, appointment.id)

    # ───────────────────────────────────────────────
    # documentos
    # ───────────────────────────────────────────────
    def test_documents_only_for_finished_attendances(self):
        attendance = self._in_progress()

        result = self.service.create_clinical_document(
            self.dentist_session, attendance.id, {"type": "ATESTADO", "payload": {"dias": 2}}
        )

        self.assertEqual(result.error, "Documentos só podem ser gerados para atendimentos finalizados")

    def test_document_returns_document_and_refreshed_attendance(self):
        attendance = self._finished()

        result = self.service.create_clinical_document(
            self.dentist_session, attendance.id, {"type": "PRESCRICAO", "payload": {"itens": ["Dipirona"]}}
        )

        self.assertTrue(result.success, result.error)
        document = result.data["document"]
        self.assertEqual(document.type, "PRESCRICAO")
        self.assertEqual(document.generated_by, self.dentist.user.id)
        self.assertEqual([d.id for d in result.data["attendance"].documents], [document.id])

    def test_unknown_document_type_is_rejected(self):
        attendance = self._finished()

        result = self.service.create_clinical_document(
            self.dentist_session, attendance.id, {"type": "RECIBO", "payload": {}}
        )

        self.assertEqual(result.error, "Dados inválidos: Tipo de documento inválido")

    # ───────────────────────────────────────────────
    # consultas
    # ───────────────────────────────────────────────
    def test_waiting_room_lists_checked_in_by_arrival(self):
        now = timezone.now()
        later = self._orm_attendance(AttendanceStatus.CHECKED_IN, now - timedelta(minutes=5))
        earlier = self._orm_attendance(AttendanceStatus.CHECKED_IN, now - timedelta(minutes=30))
        self._orm_attendance(AttendanceStatus.IN_PROGRESS, now - timedelta(minutes=40))
        self._orm_attendance(
            AttendanceStatus.CHECKED_IN,
            now - timedelta(minutes=50),
            clinic=self.foreign_clinic,
            patient=self.foreign_patient,
        )

        result = self.service.list_waiting_room(self.owner_session)

        self.assertTrue(result.success, result.error)
        self.assertEqual([a.id for a in result.data], [earlier.id, later.id])

    def test_waiting_room_filtered_by_dentist(self):
        now = timezone.now()
        mine = self._orm_attendance(AttendanceStatus.CHECKED_IN, now, dentist=self.dentist)
        self._orm_attendance(AttendanceStatus.CHECKED_IN, now, dentist=self.other_dentist)

        result = self.service.list_waiting_room(self.owner_session, dentist_id=self.dentist.id)

        self.assertEqual([a.id for a in result.data], [mine.id])

    def test_list_by_day_keeps_in_progress_visible(self):
        now = timezone.now()
        three_days_ago = now - timedelta(days=3)
        today = self._orm_attendance(AttendanceStatus.CHECKED_IN, now)
        ongoing = self._orm_attendance(
            AttendanceStatus.IN_PROGRESS, three_days_ago, started_at=three_days_ago, dentist=self.dentist
        )
        self._orm_attendance(AttendanceStatus.DONE, three_days_ago, finished_at=three_days_ago)

        result = self.service.list_attendances(
            self.owner_session, {"date": timezone.localdate().isoformat()}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual([a.id for a in result.data], [today.id, ongoing.id])

    def test_list_filters_by_status(self):
        self._check_in()
        self._in_progress()

        result = self.service.list_attendances(self.owner_session, {"status": "IN_PROGRESS"})

        self.assertEqual([a.status for a in result.data], [AttendanceStatus.IN_PROGRESS])

    def test_list_rejects_unknown_status(self):
        result = self.service.list_attendances(self.owner_session, {"status": "WAITING"})
        self.assertEqual(result.error, "Dados inválidos: Status de atendimento inválido")

    # ───────────────────────────────────────────────
    # multi-clínica
    # ───────────────────────────────────────────────
    def test_other_clinic_cannot_see_or_change_attendance(self):
        attendance = self._check_in()
        foreign = session_for(self.foreign_owner)

        self.assertEqual(self.service.get_attendance(foreign, attendance.id).error, "Atendimento não encontrado")
        self.assertEqual(
            self.service.cancel_attendance(foreign, attendance.id).error, "Atendimento não encontrado"
        )
        self.assertEqual(self.service.list_attendances(foreign).data, [])
        self.assertEqual(
            self.service.get_attendance(self.owner_session, attendance.id).data.status,
            AttendanceStatus.CHECKED_IN,
        )

    def test_malformed_id_reads_as_missing(self):
        result = self.service.get_attendance(self.owner_session, "123")
        self.assertEqual(result.error, "Atendimento não encontrado")

    # ───────────────────────────────────────────────
    # métricas
    # ───────────────────────────────────────────────
    def test_transitions_are_counted(self):
        def sample(transition):
            return registry.get_sample_value("attendance_transitions_total", {"transition": transition}) or 0

        checked_in, started = sample("check_in"), sample("start")

        self._in_progress()

        self.assertEqual(sample("check_in"), checked_in + 1)
        self.assertEqual(sample("start"), started + 1)

    def test_to_dict_serializes_result_envelope(self):
        result = self.service.check_in_attendance(self.owner_session, {"patient_id": str(self.patient.id)})

        payload = result.to_dict()

        self.assertTrue(payload["success"])
        self.assertEqual(payload["data"]["status"], "CHECKED_IN")
