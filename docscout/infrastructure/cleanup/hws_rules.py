"""Boilerplate catalogue for Hacking with Swift pages.

Order matters: boundary rules run on raw markers that later rules would
otherwise delete piecemeal.
"""
from docscout.core.models.cleanup import ExactMatch, LineFilter, RegexRule, SectionBoundary

HWS_CLEANUP_RULES = (
    # Navigation and footers
    RegexRule(r"^.*? – Hacking with Swift\s*\n"),
    SectionBoundary("- [Forums](/forums)", "- [SUBSCRIBE](/plus)"),
    SectionBoundary(
        "[Click here to visit the Hacking with Swift store >>](/store)",
        "Link copied to your pasteboard.",
    ),
    SectionBoundary("[Back to 100 Days of Swift](/100)", "Link copied to your pasteboard."),
    RegexRule(
        r"####\s*\n\nTwitter\]\(https://twitter\.com/twostraws\).*?"
        r"Hacking with Swift is ©\d{4} \[Hudson Heavy Industries\]\(https://www\.hudson\.uk\)\.",
        dot_all=True,
    ),
    SectionBoundary(
        "Alternatively, copy and paste the text below to your preferred social network",
        "via @twostraws",
    ),
    SectionBoundary("### About the Swift Knowledge Base", "Was this page useful? Let us know!"),
    SectionBoundary(
        "## Hacking with Swift+ membership includes…",
        "#### A free ticket to Unwrap Live every year",
    ),
    SectionBoundary("## Important notes", "## Related questions"),
    SectionBoundary("## Related questions"),
    SectionBoundary("## Review what you learned", "## Challenge", inclusive=False),

    # Promotional literals
    ExactMatch(
        "[NEW BOOK: **Code got you started. This gets you *paid*.** >>]"
        "(/store/everything-but-the-code)"
    ),
    ExactMatch("**BUY OUR BOOKS**"),
    ExactMatch("You are not logged in"),
    ExactMatch("[Log in or create account](/login)"),
    ExactMatch("Link copied to your pasteboard."),

    # UI elements
    RegexRule(r"\*\*SPONSORED\*\*[^\n]*\n\n\[[^\]]+\]\([^\)]+\)\n"),
    LineFilter(r"^Need help\? Tweet me \[@twostraws\]"),
    LineFilter(r"^####\s*$"),
    RegexRule(r"\n##\s*\n\n"),
    RegexRule(r"\[Back to [^\]]+\]\([^\)]+\)"),
    LineFilter(r"\[Subscribe to our RSS feed\]"),

    # Promotional sections
    RegexRule(
        r"### Subscribe to my monthly newsletter\n\nGet a free book delivered.*?\n\nSubscribe",
        dot_all=True,
    ),
    RegexRule(r"### Join us on Slack!.*?\[JOIN HERE\]\(/slack\)", dot_all=True),
    RegexRule(
        r"### Get the app!.*?with Unwrap:.*?completely free with no in-app purchases!",
        dot_all=True,
    ),
    RegexRule(
        r"## About Me\n\nMy name is Paul Hudson.*?Want to know more about me\? Click here.*?\]\.",
        dot_all=True,
    ),
    RegexRule(r"\[More articles\]\(/articles\).*", dot_all=True),
    RegexRule(
        r"## 100 Days of Swift(?:UI)?\n\n---\n\nThe 100 Days of Swift(?:UI)? is a free collection "
        r"of videos, tutorials, tests, and more to help you learn Swift(?:UI)? faster\. "
        r"\[Click here to learn more\]\(/100(?:/swiftui)?\), or watch the video below\."
    ),
    RegexRule(
        r"### Have some questions about .+?\?\n\nHit Send below to start a virtual conversation with me\."
    ),
    RegexRule(
        r"### Found \d+ articles? in the \[Swift Knowledge Base\]\(/example-code\) for this category\."
    ),

    # Navigation links
    RegexRule(r"^######\s+\[[A-Z\s]+\]\(/articles/category/[^\)]+\)"),
    LineFilter(r"^\[Read Full Article\]"),
    LineFilter(r"^\[Continue reading"),
    LineFilter(r"^\[Read more"),
    LineFilter(r"^\[Older Posts\]"),
    LineFilter(r"^\[See the full list of iOS interview questions\]"),
    LineFilter(r"^\[Return to Review Menu\]"),
    LineFilter(r"^Subscribe$"),

    # Interactive widgets
    RegexRule(
        r"How can this day be improved\?\n\nGreat job on finishing another day!.*?Thank you!",
        dot_all=True,
    ),
    RegexRule(
        r"## Now share your progress…\n\nIf you use Twitter.*?\[Tweet\]\(https://twitter.com/share\)",
        dot_all=True,
    ),
    RegexRule(
        r"Was this page useful\? Let us know!\n\n1\n2\n3\n4\n5\n\n(?:Average rating:.*?\n\n)?Thank you!",
        dot_all=True,
    ),
    RegexRule(
        r"### Reply to this topic…\n\nYou need to \[create an account or log in\]\(/login\?return=[^\)]+\) "
        r"to reply\.\n\nAll interactions here are governed by our \[code of conduct\]\(/conduct\)\."
    ),
    RegexRule(
        r"^(?:True|False|Choose Option \d+)\n(?:(?:True|False|Choose Option \d+)\n)+\n"
        r"Correct!.*?\n\nOops.*?\n\nContinue$",
        dot_all=True,
    ),

    # Code and bylines
    RegexRule(
        r"^\[Download all Swift [\d.]+ changes as a playground\]\(/files/playgrounds/swift/playground[^\)]+\)\n"
        r" \[Link to Swift [\d.]+ changes\]\(/swift/[\d.]+\)\n\n\[Browse changes in all Swift versions\]\(/swift\)"
    ),
    RegexRule(r"^\[Paul Hudson\]\(/about\).*?@twostraws.*?$", dot_all=True),

    # Navigation tables
    RegexRule(r"^\|  \|  \|  \|\n\| --- \| --- \| --- \|\n\| \[<.*?\] \|  \| \[.*?>\] \|$"),
    RegexRule(r"^\|\s\[<\s[^\]]+\]\([^\)]+\)\s\|\s{1,2}\|\s\[[^\]]+\]\([^\)]+\)\s\|$"),
    RegexRule(r"^\| \[Table of Contents\].*?\| \| \|$"),
    RegexRule(r"^\|  \|  \|  \|\n\| --- \| --- \| --- \|$"),

    # HWS+ content
    RegexRule(r"If you don.t already subscribe, you can start a free trial.*?\.?$", case_insensitive=True),
    RegexRule(r"^###### SELECT A CATEGORY\n\n(?:- \[(?:\*\*)?.+?(?:\*\*)?\]\(/plus/[^\)]+\)\n)+\n"),
    RegexRule(r"^###### COURSES BY CATEGORY\n\n(?:- \[(?:\*\*)?.+?(?:\*\*)?\]\(/plus/[^\)]+\)\n)+\n"),
    LineFilter(r"^\[Watch me answer this question.*?\]\(/plus/.*?\)$"),
    RegexRule(r"\[HWS\+\]\(/plus \".*?\"\)"),

    # Teasers and timestamps
    RegexRule(r"\.\.\.\s*\[Continue Reading >>?\]\(.*?\)$"),
    RegexRule(r"\s+\d+[dhm]\s*$"),

    # Leftovers
    LineFilter(r"^-\s*$"),
    RegexRule(r"\n\n##\s*\n"),
)
