from __future__ import annotations

from typing import Any, Callable, Dict

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "tr")
FALLBACK_LANGUAGE = "en"

TranslateFn = Callable[..., str]

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "nav.courses": "My courses",
        "nav.attendance": "Attendance",
        "nav.settings": "Settings",
        "loading": "Loading...",
        "retry": "Try again",
        "attendance.title": "My attendance",
        "attendance.selectCourseLabel": "Course",
        "attendance.selectCoursePlaceholder": "Select a course...",
        "attendance.loadingCourses": "Loading courses...",
        "attendance.loadingAttendance": "Loading attendance...",
        "attendance.noCoursesFound": "No courses found.",
        "attendance.noAttendanceData": "No attendance records for this course yet.",
        "attendance.listTitle": "Attendance records",
        "attendance.table.date": "Date",
        "attendance.table.lesson": "Lesson",
        "attendance.table.status": "Status",
        "attendance.status.present": "Present",
        "attendance.status.absent": "Absent",
        "attendance.status.late": "Late",
        "attendance.status.excused": "Excused",
        "attendance.error.missingStudentId": "Student id could not be determined for this account.",
        "attendance.error.fetchCourses": "Failed to fetch courses.",
        "attendance.error.fetchAttendance": "Failed to fetch attendance records.",
        "courses.myCoursesTitle": "My courses",
        "courses.noCourses": "You are not enrolled in any course yet.",
        "courses.semester": "Semester",
        "courses.error.fetchEnrolled": "Failed to fetch enrolled courses.",
        "courses.error.fetchAll": "Failed to fetch all courses.",
        "courses.error.missingAuth": "You must be signed in.",
        "courses.enroll.title": "Courses you can enrol in",
        "courses.enroll.button": "Enrol",
        "courses.enroll.loadingButton": "Enrolling...",
        "courses.enroll.noAvailableCourses": "There are no other courses to enrol in.",
        "courses.enroll.success": "Enrolled in {course_code} successfully!",
        "courses.enroll.error.generic": "Enrolment failed.",
        "settings.title": "Settings",
        "settings.profileTitle": "Profile",
        "settings.connectionTitle": "Connection",
        "settings.label.firstName": "First name",
        "settings.label.lastName": "Last name",
        "settings.label.apiUrl": "API URL",
        "settings.label.language": "Language",
        "settings.button.save": "Save changes",
        "settings.button.saveConnection": "Save connection",
        "settings.error.notAuthenticated": "You must be signed in to update your profile.",
        "settings.error.updateFailed": "Failed to update profile.",
        "settings.error.required": "{field} is required.",
        "settings.success.updateMessage": "Profile updated successfully.",
        "settings.success.connectionSaved": "Connection settings saved.",
    },
    "tr": {
        "nav.courses": "Derslerim",
        "nav.attendance": "Devamsızlık",
        "nav.settings": "Ayarlar",
        "loading": "Yükleniyor...",
        "retry": "Tekrar dene",
        "attendance.title": "Devamsızlık Durumum",
        "attendance.selectCourseLabel": "Ders",
        "attendance.selectCoursePlaceholder": "Bir ders seçin...",
        "attendance.loadingCourses": "Dersler yükleniyor...",
        "attendance.loadingAttendance": "Devamsızlık bilgileri yükleniyor...",
        "attendance.noCoursesFound": "Ders bulunamadı.",
        "attendance.noAttendanceData": "Bu ders için henüz devamsızlık kaydı yok.",
        "attendance.listTitle": "Devamsızlık Kayıtları",
        "attendance.table.date": "Tarih",
        "attendance.table.lesson": "Ders Saati",
        "attendance.table.status": "Durum",
        "attendance.status.present": "Katıldı",
        "attendance.status.absent": "Katılmadı",
        "attendance.status.late": "Geç kaldı",
        "attendance.status.excused": "İzinli",
        "attendance.error.missingStudentId": "Öğrenci kimliği alınamadı.",
        "attendance.error.fetchCourses": "Dersler alınamadı.",
        "attendance.error.fetchAttendance": "Devamsızlık bilgileri alınamadı.",
        "courses.myCoursesTitle": "Derslerim",
        "courses.noCourses": "Henüz hiçbir derse kayıtlı değilsiniz.",
        "courses.semester": "Dönem",
        "courses.error.fetchEnrolled": "Kayıtlı dersler alınamadı.",
        "courses.error.fetchAll": "Tüm dersler alınamadı.",
        "courses.error.missingAuth": "Giriş yapmalısınız.",
        "courses.enroll.title": "Kayıt Olabileceğiniz Dersler",
        "courses.enroll.button": "Derse Kaydol",
        "courses.enroll.loadingButton": "Kaydediliyor...",
        "courses.enroll.noAvailableCourses": "Kayıt olabileceğiniz başka ders bulunmamaktadır.",
        "courses.enroll.success": "Başarıyla {course_code} dersine kayıt oldunuz!",
        "courses.enroll.error.generic": "Derse kayıt olma işlemi başarısız.",
        "settings.title": "Ayarlar",
        "settings.profileTitle": "Profil",
        "settings.connectionTitle": "Bağlantı",
        "settings.label.firstName": "Ad",
        "settings.label.lastName": "Soyad",
        "settings.label.apiUrl": "API adresi",
        "settings.label.language": "Dil",
        "settings.button.save": "Değişiklikleri kaydet",
        "settings.button.saveConnection": "Bağlantıyı kaydet",
        "settings.error.notAuthenticated": "Profilinizi güncellemek için giriş yapmalısınız.",
        "settings.error.updateFailed": "Profil güncellenemedi.",
        "settings.error.required": "{field} zorunludur.",
        "settings.success.updateMessage": "Profil başarıyla güncellendi.",
        "settings.success.connectionSaved": "Bağlantı ayarları kaydedildi.",
    },
}


class Translator:
    """Look up display strings for the active language."""

    def __init__(self, language: str = FALLBACK_LANGUAGE) -> None:
        self.language = language if language in CATALOGS else FALLBACK_LANGUAGE

    def __call__(self, key: str, default: str | None = None, **params: Any) -> str:
        text = CATALOGS[self.language].get(key)
        if text is None:
            text = CATALOGS[FALLBACK_LANGUAGE].get(key)
        if text is None:
            text = default if default is not None else key
        if params:
            try:
                return text.format(**params)
            except (KeyError, IndexError):
                return text
        return text
