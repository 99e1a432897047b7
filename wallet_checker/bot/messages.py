"""Telegram bot message templates and constants.

Contains all user-facing message templates in Arabic, error messages, and
formatting constants for bot responses. All templates use Telegram's legacy
Markdown parse mode.
"""

CHECK_WALLET_BUTTON = "🎯 فحص محفظة"

START_MESSAGE = (
    "🎯 *مرحباً بك في بوت فحص محافظ Magic Eden*\n\n"
    "*📝 كيفية الاستخدام:*\n"
    "• أرسل عنوان محفظة Solana\n"
    "• أو أرسل المفتاح الخاص (base58)\n"
    "• أو أرسل نص يحتوي على عدة عناوين\n\n"
    "*🔍 ما يتم فحصه:*\n"
    "✅ نشاط البيع والشراء\n"
    "✅ NFTs المعروضة للبيع (النشطة فقط)\n"
    "✅ رصيد الضمان (Escrow)\n"
    "✅ العروض المقدمة والمستلمة (النشطة فقط) مع قيمها\n\n"
    "*⚡ مثال:*\n"
    "`9sBtLtMHWT1Srg1Q2wQMifuY6jrt14fPv7CTpyB6aHQE`"
)

SEND_ADDRESS_PROMPT = "📝 أرسل عنوان المحفظة أو المفتاح الخاص للفحص"

# Loading messages
LOADING_MESSAGE = "🔍 جاري فحص المحفظة..."
BATCH_LOADING_MESSAGE = "🔍 تم العثور على {count} محفظة، جاري الفحص..."

# Error messages
INVALID_INPUT_MESSAGE = (
    "❌ *لم يتم العثور على عناوين صالحة*\n"
    "يرجى إرسال عنوان محفظة صالح أو مفتاح خاص"
)
CHECK_FAILED_MESSAGE = "❌ *حدث خطأ أثناء الفحص*\nيرجى المحاولة مرة أخرى لاحقاً"

# Single wallet report
REPORT_HEADER = "🎯 *نتيجة فحص المحفظة*"
ADDRESS_LINE = "📍 *العنوان:*\n`{address}`"
SECRET_KEY_LINE = "🔑 *المفتاح الخاص:*\n`{secret}`"
RESULTS_HEADER = "📊 *نتائج الفحص:*"
TRADING_LINE = "{mark} *البيع والشراء:* {count} عملية"
LISTED_LINE = "{mark} *المعروض للبيع:* {count} NFT"
ESCROW_LINE = "{mark} *رصيد الضمان:* {balance} SOL"
OFFERS_MADE_LINE = "{mark} *العروض المقدمة:* {count} عرض نشط ({total} SOL)"
OFFERS_RECEIVED_LINE = "{mark} *العروض المستلمة:* {count} عرض نشط ({total} SOL)"
DEGRADED_LINE = "⚠️ *تعذر جلب بعض البيانات:* {facets}"

RECENT_ACTIVITY_HEADER = "📈 *آخر الأنشطة:*"
LISTED_TOKENS_HEADER = "🖼️ *NFTs المعروضة ({count}):*"
OFFERS_MADE_HEADER = "💰 *العروض المقدمة ({count}):*"
OFFERS_RECEIVED_HEADER = "💎 *العروض المستلمة ({count}):*"
NUMBERED_ITEM_LINE = "{index}. {name} - {price}"
OFFERS_TOTAL_LINE = "*الإجمالي: {total} SOL*"

QUICK_LINKS_HEADER = "🔗 *روابط سريعة:*"
MAGIC_EDEN_LINK = "[عرض على Magic Eden](https://magiceden.io/u/{address})"
SOLSCAN_LINK = "[عرض على Solscan](https://solscan.io/account/{address})"
CHECKED_AT_LINE = "⏰ *وقت الفحص:* {timestamp}"
CHECKED_AT_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

UNKNOWN_NAME = "Unknown"
NO_PRICE = "N/A"

MARK_YES = "✅"
MARK_NO = "❌"

FACET_NAMES = {
    "activity": "النشاط",
    "tokens": "NFTs",
    "escrow": "رصيد الضمان",
    "offers_made": "العروض المقدمة",
    "offers_received": "العروض المستلمة",
}

# Batch summary
BATCH_HEADER = "🎯 *نتائج فحص {count} محفظة*"
BATCH_WALLET_LINE = "📍 *المحفظة {index}:* `{short_address}...`"
BATCH_STATS_LINE = "🔄 تداول: {trading} | 🖼️ معروض: {listed} | 💰 ضمان: {escrow} SOL"
BATCH_OFFERS_LINE = (
    "📤 عروض: {made_count} ({made_total} SOL) | 📥 مستلم: {received_count} ({received_total} SOL)"
)
BATCH_WALLET_ERROR_LINE = "📍 *المحفظة {index}:* `{short_address}...` - ❌ خطأ"
BATCH_TRUNCATED_NOTICE = (
    "📝 *ملاحظة:* تم عرض أول {shown} محافظ فقط من {total} ({remaining} لم يتم فحصها)"
)

# Health page
HEALTH_PAGE = """<!DOCTYPE html>
<html dir="rtl">
<head>
    <meta charset="UTF-8">
    <title>بوت فحص محافظ Magic Eden</title>
    <style>
        body { font-family: Arial, sans-serif; text-align: center; padding: 50px; background: #f5f5f5; }
        .container { background: white; padding: 30px; border-radius: 10px; max-width: 600px; margin: 0 auto; }
        .status { color: green; font-weight: bold; font-size: 18px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>🤖 بوت فحص محافظ Magic Eden</h1>
        <p class="status">✅ البوت يعمل بشكل طبيعي</p>
        <p>استخدم بوت التلجرام لفحص محافظك</p>
        <p>📊 يتم فحص: نشاط التداول - NFTs المعروضة - رصيد الضمان - العروض النشطة</p>
        <hr>
        <p>⚡ Powered by Magic Eden API</p>
    </div>
</body>
</html>
"""
