"""User-facing Arabic strings returned by the API."""

EMPTY_SEARCH_QUERY = "اكتب اسم الجهاز للبحث عنه."
MISSING_DEVICE = "اكتب اسم الجهاز أو اختره من الاقتراحات."
INVALID_BODY = "صيغة الطلب غير صحيحة."

LOCAL_THROTTLE = "تم إيقاف الطلب مؤقتاً لتفادي الحظر. انتظر ثوانٍ ثم أعد المحاولة."
UPSTREAM_BLOCKED = "المصدر حظر الطلبات سابقاً (429). انتظر قليلاً ثم حاول مجدداً."
UPSTREAM_RATE_LIMITED = "المصدر حظر الطلبات لكثرتها (429). انتظر نصف دقيقة ثم حاول مرة أخرى."

SEARCH_FAILED = "حدث خطأ أثناء معالجة البحث."
CHECK_FAILED = "حدث خطأ أثناء معالجة الطلب."

DEVICE_NOT_FOUND = "لم نجد جهازاً مطابقاً. جرّب كتابة الاسم بشكل أدق."
SIM_UNKNOWN = "لم نعثر على تفاصيل الشريحة لهذا الجهاز. قد تحتاج للتأكد يدوياً أو من دليل الجهاز."
ESIM_SUPPORTED = "هذا الجهاز يدعم شريحة eSIM بحسب تفاصيل الشرائح."
ESIM_NOT_EVIDENT = "لم نجد ما يثبت دعم eSIM في مواصفات هذا الجهاز."
