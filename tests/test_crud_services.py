"""
Tests for the admin screens: call-list edits, appointment edits, doctors,
calendars, specialties and services.

Document classes are patched inside each service module.
"""

from datetime import date, datetime, time
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest
from pydantic import ValidationError

from app.features.appointments.schemas import UpdateAppointmentRequest
from app.features.appointments.service import AppointmentService
from app.features.call_lists.schemas import UpdateCallListRequest, UpdateContactRequest
from app.features.call_lists.service import CallListService
from app.features.clinic_services.schemas import ClinicServiceRequest
from app.features.clinic_services.service import ClinicServiceService
from app.features.doctors.schemas import DoctorProfileRequest, DoctorRequest
from app.features.doctors.service import DoctorService
from app.features.schedules.schemas import ScheduleEntryRequest
from app.features.schedules.service import ScheduleService
from app.features.session.schemas import CurrentUser, Role
from app.features.specialties.schemas import SpecialtyRequest
from app.shared.exceptions import ForbiddenException, NotFoundException


def doctor_user(doctor_id="D1"):
    return CurrentUser(identity_id="u1", session_id="s1", role=Role.DOCTOR, doctor_id=doctor_id)


def admin_user():
    return CurrentUser(identity_id="a1", session_id="s1", role=Role.ADMIN)


def document(**values):
    doc = SimpleNamespace(**values)
    doc.save = AsyncMock()
    doc.delete = AsyncMock()
    doc.update_timestamp = MagicMock()
    return doc


def make_call_list(**overrides):
    values = dict(id="L1", liste_ismi="Kontrol", asistan_mesaji=None, aranma_durumu=False, toplam_kisi=3, tamamlanan=0)
    values.update(overrides)
    return document(**values)


def contact_query(completed=0):
    """Patched CallListContact whose ``find(...)`` answers ``count`` and ``delete``."""
    contacts = MagicMock()
    contacts.find.return_value.count = AsyncMock(return_value=completed)
    contacts.find.return_value.delete = AsyncMock()
    return contacts


class TestCallListEdits:

    @pytest.mark.asyncio
    async def test_update_list_changes_only_sent_fields(self):
        call_list = make_call_list(asistan_mesaji="Merhaba")

        with patch.object(CallListService, "get_list", AsyncMock(return_value=call_list)):
            await CallListService.update_list("L1", UpdateCallListRequest(liste_ismi="Aşı hatırlatma"))

        assert call_list.liste_ismi == "Aşı hatırlatma"
        assert call_list.asistan_mesaji == "Merhaba"
        call_list.save.assert_awaited_once()

    def test_list_name_cannot_be_cleared(self):
        with pytest.raises(ValidationError):
            UpdateCallListRequest(liste_ismi=None)

    @pytest.mark.asyncio
    async def test_delete_list_removes_contacts_first(self):
        call_list = make_call_list()
        contacts = contact_query()
        order = MagicMock()
        order.attach_mock(contacts.find.return_value.delete, "contacts_deleted")
        order.attach_mock(call_list.delete, "list_deleted")

        with patch.object(CallListService, "get_list", AsyncMock(return_value=call_list)), \
                patch("app.features.call_lists.service.CallListContact", contacts):
            await CallListService.delete_list("L1")

        assert order.mock_calls == [call.contacts_deleted(), call.list_deleted()]

    @pytest.mark.asyncio
    async def test_delete_contact_decrements_total(self):
        call_list = make_call_list(toplam_kisi=3)
        contact = document(id="K1", liste_id="L1")
        contacts = contact_query()
        contacts.get = AsyncMock(return_value=contact)

        with patch.object(CallListService, "get_list", AsyncMock(return_value=call_list)), \
                patch("app.features.call_lists.service.CallListContact", contacts):
            result = await CallListService.delete_contact("L1", "K1")

        assert result.toplam_kisi == 2
        contact.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_contact_never_goes_below_zero(self):
        call_list = make_call_list(toplam_kisi=0)
        contacts = contact_query()
        contacts.get = AsyncMock(return_value=document(id="K1", liste_id="L1"))

        with patch.object(CallListService, "get_list", AsyncMock(return_value=call_list)), \
                patch("app.features.call_lists.service.CallListContact", contacts):
            await CallListService.delete_contact("L1", "K1")

        assert call_list.toplam_kisi == 0

    @pytest.mark.asyncio
    async def test_contact_of_another_list_is_not_found(self):
        contacts = contact_query()
        contacts.get = AsyncMock(return_value=document(id="K1", liste_id="L2"))

        with patch.object(CallListService, "get_list", AsyncMock(return_value=make_call_list())), \
                patch("app.features.call_lists.service.CallListContact", contacts):
            with pytest.raises(NotFoundException):
                await CallListService.update_contact("L1", "K1", UpdateContactRequest(isim="Ali"))

    @pytest.mark.asyncio
    async def test_contact_edit_resyncs_completion(self):
        call_list = make_call_list(aranma_durumu=True, toplam_kisi=2, tamamlanan=1)
        contact = document(id="K1", liste_id="L1", isim="Ali", soyisim=None, telefon="05551112233")
        contacts = contact_query(completed=2)
        contacts.get = AsyncMock(return_value=contact)

        with patch.object(CallListService, "get_list", AsyncMock(return_value=call_list)), \
                patch("app.features.call_lists.service.CallListContact", contacts):
            await CallListService.update_contact("L1", "K1", UpdateContactRequest(soyisim="Kaya"))

        assert contact.soyisim == "Kaya"
        assert contact.isim == "Ali"
        assert call_list.tamamlanan == 2
        assert call_list.aranma_durumu is False

    @pytest.mark.asyncio
    async def test_unchanged_completion_is_not_saved(self):
        call_list = make_call_list(aranma_durumu=True, tamamlanan=1)

        with patch("app.features.call_lists.service.CallListContact", contact_query(completed=1)):
            await CallListService.sync_completion(call_list)

        call_list.save.assert_not_awaited()
        assert call_list.aranma_durumu is True

    @pytest.mark.asyncio
    async def test_partial_completion_keeps_calling(self):
        call_list = make_call_list(aranma_durumu=True, toplam_kisi=3, tamamlanan=0)

        with patch("app.features.call_lists.service.CallListContact", contact_query(completed=2)):
            await CallListService.sync_completion(call_list)

        assert call_list.tamamlanan == 2
        assert call_list.aranma_durumu is True
        call_list.save.assert_awaited_once()


class TestAppointmentEdits:

    @pytest.mark.asyncio
    async def test_edit_sets_fields_and_timestamp(self):
        appointment = document(
            id="R1", randevu_tarihi=datetime(2025, 6, 2, 14, 30), randevu_tipi="klinik",
            online_link=None, randevu_notu="Kontrol", guncellenme_tarihi=None,
        )
        request = UpdateAppointmentRequest(randevu_tipi="Online", online_link="https://meet.example/abc")

        with patch.object(AppointmentService, "_get_for_user", AsyncMock(return_value=appointment)), \
                patch.object(AppointmentService, "_to_response", AsyncMock(return_value="response")):
            result = await AppointmentService.update_appointment(admin_user(), "R1", request)

        assert result == "response"
        assert appointment.randevu_tipi == "online"
        assert appointment.online_link == "https://meet.example/abc"
        assert appointment.randevu_notu == "Kontrol"
        assert appointment.randevu_tarihi == datetime(2025, 6, 2, 14, 30)
        assert isinstance(appointment.guncellenme_tarihi, datetime)
        appointment.save.assert_awaited_once()

    def test_unknown_type_falls_back_to_clinic(self):
        assert UpdateAppointmentRequest(randevu_tipi="yuz_yuze").randevu_tipi == "klinik"

    @pytest.mark.asyncio
    async def test_delete_unlinks_call_records_first(self):
        appointment = document(id="R1")
        records = MagicMock()
        records.find.return_value.update = AsyncMock()
        order = MagicMock()
        order.attach_mock(records.find.return_value.update, "records_unlinked")
        order.attach_mock(appointment.delete, "appointment_deleted")

        with patch.object(AppointmentService, "_get_for_user", AsyncMock(return_value=appointment)), \
                patch("app.features.appointments.service.CallRecord", records):
            await AppointmentService.delete_appointment(admin_user(), "R1")

        assert order.mock_calls == [
            call.records_unlinked({"$set": {"randevu_id": None}}),
            call.appointment_deleted(),
        ]

    @pytest.mark.asyncio
    async def test_doctor_cannot_delete_foreign_appointment(self):
        with patch.object(
            AppointmentService, "_get_for_user",
            AsyncMock(side_effect=ForbiddenException("Appointment belongs to another doctor")),
        ):
            with pytest.raises(ForbiddenException):
                await AppointmentService.delete_appointment(doctor_user("D2"), "R1")


class TestDoctors:

    def test_names_are_trimmed_and_blanks_cleared(self):
        request = DoctorRequest(ad="  Ayşe ", soyad="Yılmaz", telefon="   ", email=" ayse@example.com ")

        assert request.ad == "Ayşe"
        assert request.telefon is None
        assert request.email == "ayse@example.com"

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            DoctorRequest(ad=" ", soyad="Yılmaz")

    @pytest.mark.asyncio
    async def test_own_profile_update_keeps_active_flag(self):
        doctor = document(id="D1", ad="Ayşe", soyad="Yılmaz", aktif=False, uzmanlik_id=None)
        request = DoctorProfileRequest(ad="Ayşe", soyad="Demir", unvan="Doç. Dr.")

        with patch.object(DoctorService, "get_doctor", AsyncMock(return_value=doctor)):
            await DoctorService.update_doctor("D1", request)

        assert doctor.soyad == "Demir"
        assert doctor.unvan == "Doç. Dr."
        assert doctor.aktif is False
        doctor.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_specialty_is_rejected(self):
        doctor = document(id="D1", aktif=True)
        specialties = MagicMock()
        specialties.get = AsyncMock(return_value=None)

        with patch.object(DoctorService, "get_doctor", AsyncMock(return_value=doctor)), \
                patch("app.features.doctors.service.Specialty", specialties):
            with pytest.raises(NotFoundException):
                await DoctorService.update_doctor("D1", DoctorRequest(ad="A", soyad="B", uzmanlik_id="U9"))

        doctor.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_only_deactivates(self):
        doctor = document(id="D1", ad="Ayşe", soyad="Yılmaz", unvan=None, aktif=True, display_name="Ayşe Yılmaz")

        with patch.object(DoctorService, "get_doctor", AsyncMock(return_value=doctor)):
            result = await DoctorService.deactivate_doctor("D1")

        assert result.aktif is False
        doctor.save.assert_awaited_once()
        doctor.delete.assert_not_awaited()


class TestSchedules:

    def test_day_first_date_is_accepted(self):
        request = ScheduleEntryRequest(tarih="05-03-2025", baslangic_saat="09:00", bitis_saat="12:30")

        assert request.tarih == date(2025, 3, 5)
        assert request.baslangic_saat == time(9, 0)

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            ScheduleEntryRequest(tarih="2025-03-05", baslangic_saat="14:00", bitis_saat="14:00")

    def test_doctor_cannot_touch_other_calendar(self):
        with pytest.raises(ForbiddenException):
            ScheduleService.check_access(doctor_user("D1"), "D2")

    def test_admin_can_touch_any_calendar(self):
        ScheduleService.check_access(admin_user(), "D2")

    @pytest.mark.asyncio
    async def test_create_stores_normalized_values(self):
        entries = MagicMock()
        doctors = MagicMock()
        doctors.get = AsyncMock(return_value=document(id="D1"))
        request = ScheduleEntryRequest(tarih="05-03-2025", baslangic_saat="09:00", bitis_saat="12:00", not_bilgi="  ")

        with patch("app.features.schedules.service.DoctorScheduleEntry", entries), \
                patch("app.features.schedules.service.Doctor", doctors):
            entries.return_value.insert = AsyncMock()
            await ScheduleService.create_entry(doctor_user("D1"), "D1", request)

        entries.assert_called_once_with(
            doktor_id="D1",
            tarih="2025-03-05",
            baslangic_saat="09:00",
            bitis_saat="12:00",
            musait=True,
            not_bilgi=None,
        )
        entries.return_value.insert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_entry_of_another_doctor_is_not_found(self):
        entries = MagicMock()
        entries.get = AsyncMock(return_value=document(id="T1", doktor_id="D2"))

        with patch("app.features.schedules.service.DoctorScheduleEntry", entries):
            with pytest.raises(NotFoundException):
                await ScheduleService.delete_entry(admin_user(), "D1", "T1")


class TestCatalogues:

    def test_specialty_name_is_capitalized(self):
        request = SpecialtyRequest(ad="  kardiyoloji ", aciklama="")

        assert request.ad == "Kardiyoloji"
        assert request.aciklama is None

    def test_zero_price_and_duration_mean_unset(self):
        request = ClinicServiceRequest(hizmet_adi=" EKG ", fiyat=0, sure_dakika=0, uzmanlik_id="")

        assert request.hizmet_adi == "EKG"
        assert request.fiyat is None
        assert request.sure_dakika is None
        assert request.uzmanlik_id is None

    @pytest.mark.asyncio
    async def test_service_delete_only_deactivates(self):
        service = document(id="H1", hizmet_adi="EKG", aktif=True)

        with patch.object(ClinicServiceService, "get_service", AsyncMock(return_value=service)):
            result = await ClinicServiceService.deactivate_service("H1")

        assert result.aktif is False
        service.save.assert_awaited_once()
        service.delete.assert_not_awaited()
