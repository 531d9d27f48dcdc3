"""
Domínio → ORM da gestão clínica.

⚑ Toda tabela de negócio carrega `clinic` (escopo multi-clínica)
⚑ Unicidades de negócio (CRO, CPF, e-mail, nome de especialidade) por clínica
⚑ Sub-recursos do atendimento são apagados fisicamente; demais entidades
  usam `is_active`
"""

from __future__ import annotations

import uuid

from django.db import models
from django.db.models import Index, Q, UniqueConstraint
from django.db.models.functions import Lower


# ╭──────────────────────────────────────────────╮
# │ 1. Clínicas / Acesso                        │
# ╰──────────────────────────────────────────────╯
class Clinic(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "clinics"

    def __str__(self) -> str:
        return self.name


class User(models.Model):
    class Role(models.TextChoices):
        OWNER = "OWNER", "Proprietário"
        ADMIN = "ADMIN", "Administrador"
        DENTIST = "DENTIST", "Dentista"
        RECEPTIONIST = "RECEPTIONIST", "Recepcionista"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="users")
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=128)
    password_hash = models.CharField(max_length=128)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.RECEPTIONIST,
        db_index=True,
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        constraints = [
            UniqueConstraint(fields=["clinic", "email"], name="uq_user_clinic_email"),
        ]
        indexes = [
            Index(Lower("email"), name="user_email_lower_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


# ╭──────────────────────────────────────────────╮
# │ 2. Pacientes                                │
# ╰──────────────────────────────────────────────╯
class Patient(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="patients")
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=128, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    cpf = models.CharField(max_length=14, blank=True, null=True)
    birth_date = models.DateTimeField(blank=True, null=True)
    address = models.CharField(max_length=500, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "patients"
        constraints = [
            UniqueConstraint(
                fields=["clinic", "cpf"],
                condition=Q(cpf__isnull=False),
                name="uq_patient_clinic_cpf",
            ),
        ]
        indexes = [
            Index(fields=["clinic", "name"]),
        ]

    def __str__(self) -> str:
        return self.name


# ╭──────────────────────────────────────────────╮
# │ 3. Catálogo: especialidades e procedimentos │
# ╰──────────────────────────────────────────────╯
class Specialty(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="specialties")
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "specialties"
        ordering = ["name"]
        constraints = [
            UniqueConstraint(fields=["clinic", "name"], name="uq_specialty_clinic_name"),
        ]

    def __str__(self) -> str:
        return self.name


class Procedure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="procedures")
    specialty = models.ForeignKey(Specialty, on_delete=models.PROTECT, related_name="procedures")
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True, null=True)
    base_value = models.DecimalField(max_digits=10, decimal_places=2)
    commission_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "procedures"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Cid(models.Model):
    """
    Catálogo CID-10 compartilhado entre clínicas.
    Não há FK a partir de AttendanceCID; o vínculo é pelo código normalizado.
    """
    code = models.CharField(max_length=10, unique=True)
    description = models.CharField(max_length=255)
    category = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        db_table = "cids"
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.code} – {self.description}"


# ╭──────────────────────────────────────────────╮
# │ 4. Dentistas                                │
# ╰──────────────────────────────────────────────╯
class Dentist(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="dentists")
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="dentist")
    cro = models.CharField(max_length=50)
    specialty = models.CharField(max_length=100, blank=True, null=True)
    working_hours = models.JSONField(blank=True, null=True)
    bank_info = models.JSONField(blank=True, null=True)
    commission = models.DecimalField(max_digits=5, decimal_places=2, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "dentists"
        constraints = [
            UniqueConstraint(fields=["clinic", "cro"], name="uq_dentist_clinic_cro"),
        ]

    def __str__(self) -> str:
        return f"{self.cro} ({self.user_id})"


class DentistProcedure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dentist = models.ForeignKey(Dentist, on_delete=models.CASCADE, related_name="procedure_links")
    procedure = models.ForeignKey(Procedure, on_delete=models.CASCADE, related_name="dentist_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "dentist_procedures"
        constraints = [
            UniqueConstraint(fields=["dentist", "procedure"], name="uq_dentist_procedure"),
        ]


class DentistSpecialty(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dentist = models.ForeignKey(Dentist, on_delete=models.CASCADE, related_name="specialty_links")
    specialty = models.ForeignKey(Specialty, on_delete=models.CASCADE, related_name="dentist_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "dentist_specialties"
        constraints = [
            UniqueConstraint(fields=["dentist", "specialty"], name="uq_dentist_specialty"),
        ]


# ╭──────────────────────────────────────────────╮
# │ 5. Agenda                                   │
# ╰──────────────────────────────────────────────╯
class Appointment(models.Model):
    class Status(models.TextChoices):
        SCHEDULED = "SCHEDULED", "Agendado"
        CONFIRMED = "CONFIRMED", "Confirmado"
        COMPLETED = "COMPLETED", "Concluído"
        CANCELED = "CANCELED", "Cancelado"
        NO_SHOW = "NO_SHOW", "Não Compareceu"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="appointments")
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="appointments")
    dentist = models.ForeignKey(Dentist, on_delete=models.CASCADE, related_name="appointments")
    procedure = models.ForeignKey(
        Procedure, on_delete=models.SET_NULL, blank=True, null=True, related_name="appointments"
    )
    date = models.DateTimeField(db_index=True)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.SCHEDULED, db_index=True
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "appointments"
        indexes = [
            Index(fields=["clinic", "date"]),
        ]


# ╭──────────────────────────────────────────────╮
# │ 6. Atendimentos                             │
# ╰──────────────────────────────────────────────╯
class Attendance(models.Model):
    class Status(models.TextChoices):
        CHECKED_IN = "CHECKED_IN", "Check-in"
        IN_PROGRESS = "IN_PROGRESS", "Em Atendimento"
        DONE = "DONE", "Finalizado"
        CANCELED = "CANCELED", "Cancelado"
        NO_SHOW = "NO_SHOW", "Não Compareceu"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="attendances")
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="attendances")
    dentist = models.ForeignKey(
        Dentist, on_delete=models.SET_NULL, blank=True, null=True, related_name="attendances"
    )
    appointment = models.ForeignKey(
        Appointment, on_delete=models.SET_NULL, blank=True, null=True, related_name="attendances"
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.CHECKED_IN, db_index=True
    )
    arrival_at = models.DateTimeField(db_index=True)
    started_at = models.DateTimeField(blank=True, null=True)
    finished_at = models.DateTimeField(blank=True, null=True)
    created_by_id = models.UUIDField(blank=True, null=True)
    created_by_role = models.CharField(max_length=20, choices=User.Role.choices, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendances"
        constraints = [
            # NULL não colide: só vínculos ativos com agendamento contam
            UniqueConstraint(fields=["appointment"], name="uq_attendance_appointment"),
        ]
        indexes = [
            Index(fields=["clinic", "status", "arrival_at"]),
        ]


class AttendanceCID(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendance = models.ForeignKey(Attendance, on_delete=models.CASCADE, related_name="cids")
    cid_code = models.CharField(max_length=10)
    description = models.CharField(max_length=255)
    observation = models.TextField(blank=True, null=True)
    created_by_dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="+")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "attendance_cids"
        ordering = ["created_at"]


class AttendanceProcedure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendance = models.ForeignKey(Attendance, on_delete=models.CASCADE, related_name="procedures")
    procedure = models.ForeignKey(
        Procedure, on_delete=models.PROTECT, blank=True, null=True, related_name="+"
    )
    procedure_code = models.CharField(max_length=50, blank=True, null=True)
    description = models.CharField(max_length=255, blank=True, null=True)
    tooth = models.CharField(max_length=2, blank=True, null=True)
    faces = models.JSONField(default=list)
    surface = models.CharField(max_length=50, blank=True, null=True)
    quantity = models.PositiveIntegerField(default=1)
    clinical_status = models.CharField(max_length=20)
    price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="+")
    observations = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "attendance_procedures"


class AttendanceOdontogram(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendance = models.OneToOneField(Attendance, on_delete=models.CASCADE, related_name="odontogram")
    data = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendance_odontograms"


class ClinicalDocument(models.Model):
    class Type(models.TextChoices):
        ATESTADO = "ATESTADO", "Atestado"
        PRESCRICAO = "PRESCRICAO", "Prescrição"
        EXAME = "EXAME", "Solicitação de exame"
        ENCAMINHAMENTO = "ENCAMINHAMENTO", "Encaminhamento"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendance = models.ForeignKey(Attendance, on_delete=models.CASCADE, related_name="documents")
    type = models.CharField(max_length=20, choices=Type.choices)
    payload = models.JSONField(default=dict)
    generated_by = models.UUIDField()
    generated_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "clinical_documents"


# ╭──────────────────────────────────────────────╮
# │ 7. Prontuário                               │
# ╰──────────────────────────────────────────────╯
class Record(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="records")
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="records")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="records")
    appointment = models.ForeignKey(
        Appointment, on_delete=models.SET_NULL, blank=True, null=True, related_name="records"
    )
    attendance = models.OneToOneField(
        Attendance, on_delete=models.SET_NULL, blank=True, null=True, related_name="record"
    )
    date = models.DateTimeField()
    description = models.TextField()
    procedures = models.JSONField(default=list)
    odontogram = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "records"
        ordering = ["-date"]


# ╭──────────────────────────────────────────────╮
# │ 8. Orçamentos e Pagamentos                  │
# ╰──────────────────────────────────────────────╯
class TreatmentPlan(models.Model):
    class Status(models.TextChoices):
        OPEN = "OPEN", "Em aberto"
        APPROVED = "APPROVED", "Aprovado"
        REJECTED = "REJECTED", "Rejeitado"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="treatment_plans")
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="treatment_plans")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="treatment_plans")
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.OPEN, db_index=True
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "treatment_plans"
        ordering = ["-created_at"]


class TreatmentItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    plan = models.ForeignKey(TreatmentPlan, on_delete=models.CASCADE, related_name="items")
    procedure = models.ForeignKey(
        Procedure, on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    description = models.CharField(max_length=200)
    tooth = models.CharField(max_length=10, blank=True, null=True)
    value = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "treatment_items"


class Payment(models.Model):
    class Method(models.TextChoices):
        CASH = "CASH", "Dinheiro"
        PIX = "PIX", "PIX"
        CARD = "CARD", "Cartão"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="payments")
    patient = models.ForeignKey(
        Patient, on_delete=models.SET_NULL, blank=True, null=True, related_name="payments"
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    method = models.CharField(max_length=10, choices=Method.choices)
    description = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "payments"
        ordering = ["-created_at"]


class PaymentTreatmentPlan(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment = models.ForeignKey(Payment, on_delete=models.CASCADE, related_name="plan_links")
    plan = models.ForeignKey(TreatmentPlan, on_delete=models.CASCADE, related_name="payment_links")

    class Meta:
        db_table = "payment_treatment_plans"
        constraints = [
            UniqueConstraint(fields=["payment", "plan"], name="uq_payment_plan"),
        ]
