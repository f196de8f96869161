"""MCP Prompts — pre-built interaction templates for clinic visitor journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_health_prompts(mcp: FastMCP) -> None:
    """Register clinic health MCP prompts."""

    @mcp.prompt()
    def general_checkup_prompt(age: str = "", gender: str = "") -> str:
        """Prompt template for a quick general check-up with the calculators."""
        about = f" (العمر: {age}، الجنس: {gender})" if age or gender else ""
        return f"""أرغب في فحص صحي عام سريع{about}. من فضلك:

1. احسب مؤشر كتلة الجسم ونسبة محيط الخصر إلى الطول
2. قدّر احتياجي اليومي من السعرات والماء
3. قيّم خطر الإصابة بالسكري من النوع الثاني
4. اقترح الخطوات العملية الأهم لهذا الشهر

اسألني عن أي قيم تحتاجها قبل الحساب، وذكّرني بأن النتائج إرشادية ولا تغني عن زيارة الطبيب."""

    @mcp.prompt()
    def pregnancy_followup_prompt(last_period: str = "") -> str:
        """Prompt template for following up on a pregnancy."""
        when = f"أول يوم من آخر دورة كان {last_period}. " if last_period else ""
        return f"""{when}أريد متابعة حملي:

1. احسبي موعد الولادة المتوقع وعمر الحمل بالأسابيع
2. أخبريني بالثلث الحالي وأهم التطورات فيه
3. ما الفحوصات والتوصيات المناسبة لهذه المرحلة؟
4. متى يجب أن أراجع الطبيبة فوراً؟

من فضلك استخدمي لغة بسيطة ومطمئنة."""
