# User-facing Arabic strings. Clients match on these verbatim.

INVALID_LEVEL = "المستوى الدراسي غير صحيح"
BRANCH_REQUIRED = "الشعبة مطلوبة للسنة الثانية والثالثة"
SUBJECT_REQUIRED = "يجب تحديد المادة"
UNKNOWN_BRANCH = "الشعبة المحددة غير موجودة"
VALIDATION_OK = "تم التحقق بنجاح"

ASK_MISSING_FIELDS = "يجب تحديد السؤال والمستوى الدراسي"
GENERATE_MISSING_FIELDS = "يجب تحديد جميع المعلومات المطلوبة"
INVALID_REQUEST = "بيانات الطلب غير صحيحة"

API_KEY_ERROR = "خطأ في مفتاح API. تأكد من إضافة Google Gemini API Key الصحيح في ملف .env"
ASK_FAILED = "حدث خطأ في معالجة طلبك"
GENERATE_FAILED = "حدث خطأ في إنشاء الأسئلة"
NOT_FOUND = "المسار المطلوب غير موجود"


def subject_not_found(subject: str, level_short_label: str) -> str:
	return f'المادة "{subject}" غير موجودة في برنامج {level_short_label}'


def question_count_out_of_range(low: int, high: int) -> str:
	return f"عدد الأسئلة يجب أن يكون بين {low} و {high}"
