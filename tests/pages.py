"""Canned source pages used by the offline tests."""


def schedule_page(*rows: str) -> str:
    return (
        '<html><body><div class="schedule-content"><table class="schedule"><tbody>'
        + ''.join(rows)
        + '</tbody></table></div></body></html>'
    )


def event_row(date, away, away_score, home, home_score, href=None, notes='', season_type=None) -> str:
    link = f'<a href="{href}">Box Score</a>' if href else ''
    attr = f' data-season-type="{season_type}"' if season_type else ''
    return (
        f'<tr class="event-row"{attr}>'
        f'<td class="e_date">{date}</td>'
        f'<td class="e_team away">{away}</td><td class="e_score away">{away_score}</td>'
        f'<td class="e_team home">{home}</td><td class="e_score home">{home_score}</td>'
        f'<td class="e_notes">{notes}</td><td class="e_links">{link}</td>'
        '</tr>'
    )


def stats_box(side: str, team: str, headers: list[str], rows: list[list[str]], category: str | None = None, totals=True) -> str:
    cat = f' data-category="{category}"' if category else ''
    head = ''.join(f'<th>{h}</th>' for h in headers)
    body = ''.join('<tr>' + ''.join(f'<td>{c}</td>' for c in row) + '</tr>' for row in rows)
    if totals:
        body += '<tr class="totals">' + ''.join('<td>TM</td>' for _ in headers) + '</tr>'
    return (
        f'<div class="stats-box {side}"{cat}><table><caption>{team}</caption>'
        f'<thead><tr>{head}</tr></thead><tbody>{body}</tbody></table></div>'
    )


def box_page(*boxes: str) -> str:
    return '<html><body>' + ''.join(boxes) + '</body></html>'


def play(clock, away='', score='', home='') -> str:
    return (
        f'<tr><td class="time">{clock}</td><td class="play away">{away}</td>'
        f'<td class="score">{score}</td><td class="play home">{home}</td></tr>'
    )


def plays_page(*periods: tuple[str, list[str]]) -> str:
    tables = ''.join(
        f'<table class="play-by-play"><caption>{caption}</caption><tbody>{"".join(rows)}</tbody></table>'
        for caption, rows in periods
    )
    return f'<html><body>{tables}</body></html>'


def simple_table(css: str, headers: list[str], rows: list[list[str]]) -> str:
    head = ''.join(f'<th>{h}</th>' for h in headers)
    body = ''.join('<tr>' + ''.join(f'<td>{c}</td>' for c in row) + '</tr>' for row in rows)
    return f'<table {css}><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


# =============================================================================
# WOMEN'S BASKETBALL
# =============================================================================

BKB_2019 = '/sports/wbkb/2019-20'
BKB_2018 = '/sports/wbkb/2018-19'
BKB_2021 = '/sports/wbkb/2021-22'

BKB_HEADERS = ['##', 'Player', 'MIN', 'FGM-A', 'PTS']

BKB_SCHEDULE_2019 = schedule_page(
    event_row('Nov 8', "Queen's Gaels", '65', 'Carleton Ravens', '80', href='boxscores/20191108_q7ab.xml'),
    event_row('Mar 6', 'McGill', '70', 'Carleton Ravens', '72', href='boxscores/20200306_x9cd.xml',
              notes='U SPORTS Final 8 Championship'),
    event_row('Mar 20', 'Laval', '', 'Ottawa', '', notes='Cancelled'),
)

BKB_BOX_G1 = box_page(
    stats_box('visitor', "Queen's Gaels", BKB_HEADERS, [['5', 'Jane Doe', '32:30', '7-15', '18']]),
    stats_box('home', 'Carleton Ravens', BKB_HEADERS, [
        ['10', 'Ann Smith', '28:00', '9-14', '22'],
        ['12', 'Kate Lee', '10:00', '?', '0'],
    ]),
)

BKB_BOX_G2 = box_page(
    stats_box('visitor', 'McGill', BKB_HEADERS, [['4', 'Mia Roy', '35:00', '8-20', '21']]),
    stats_box('home', 'Carleton Ravens', BKB_HEADERS, [['10', 'Ann Smith', '30:00', '10-17', '25']]),
)

BKB_PLAYS_G1 = plays_page(
    ('1st Quarter', [
        play('09:45', away='Doe made layup', score='2-0'),
        play('08:30', home='Smith made 3-pt jumper', score='2-3'),
        play('07:10', away='Foul on Doe'),
    ]),
    ('2nd Quarter', [
        play('10:00', home='Lee turnover', score='2-1'),
        play('05:00', away='Doe made jumper', score='4-5'),
    ]),
    ('OT', [
        play('4:00', away='Doe made free throw', score='6-5'),
    ]),
)

BKB_PLAYS_G2 = plays_page(
    ('1st Quarter', [
        play('09:00', away='Roy made jumper', score='2-0'),
        play('08:00', home='Smith made layup', score='2-2'),
    ]),
)

BKB_SCHEDULE_2018 = schedule_page(
    event_row('Nov 9', 'Brock', '60', 'York', '58', href='boxscores/20181109_b1rk.xml'),
)

BKB_BOX_2018 = box_page(
    stats_box('visitor', 'Brock', BKB_HEADERS, [['3', 'Sam Hill', '30:00', '6-12', '15']]),
    stats_box('home', 'York', BKB_HEADERS, [['7', 'Lou Park', '31:00', '5-13', '14']]),
)

BKB_PLAYS_2018 = plays_page(
    ('1st Quarter', [play('09:30', away='Hill made jumper', score='2-0')]),
)

BKB_SCHEDULE_2021 = schedule_page(
    event_row('Nov 5', 'Toronto', '55', 'Ryerson', '61', href='boxscores/20211105_c3de.xml'),
)

# =============================================================================
# FOOTBALL
# =============================================================================

FB_2019 = '/sports/fball/2019'

FB_SCHEDULE_2019 = schedule_page(
    event_row('Sep 2', 'Montreal Carabins', '17', 'Laval Rouge et Or', '31', href='boxscores/20190902_fb01.xml'),
)

FB_BOX = box_page(
    stats_box('home', 'Laval Rouge et Or', ['Player', 'CMP-ATT-INT', 'YDS', 'TD'],
              [['QB One', '20-30-1', '280', '2']], category='passing'),
    stats_box('home', 'Laval Rouge et Or', ['Player', 'NO', 'YDS', 'TD'],
              [['QB One', '5', '30', '0'], ['RB Two', '15', '110', '1']], category='rushing'),
    stats_box('home', 'Laval Rouge et Or', ['Player', 'FGM-A', 'LONG'],
              [['Kicker Three', '2-3', '41']], category='field_goals'),
    stats_box('visitor', 'Montreal Carabins', ['Player', 'SOLO', 'SACKS'],
              [['LB Four', '6', '1.5']], category='defence'),
)

FB_DRIVES = (
    '<html><body>'
    + simple_table(
        'class="drive-chart"',
        ['Team', 'Qtr', 'Start', 'Obtained', 'Spot', 'Plays-Yds', 'TOP', 'Result'],
        [
            ['Laval', '1st', '15:00', 'KO', 'L35', '8-75', '4:12', 'TD'],
            ['Montreal', '1st', '10:48', 'KO', 'M30', '3--5', '1:20', 'PUNT'],
            ['Laval', '2nd', '14:02', 'PUNT', 'M40', '5-28', '2:30', 'FG'],
            ['Montreal', '2nd', '11:30', 'KO', 'M35', '2-4', '0:45', 'ROUGE'],
        ],
    )
    + '</body></html>'
)

FB_PLAYS = plays_page(
    ('1st Quarter', [
        play('15:00', home='Kickoff', score='0-0'),
        play('10:48', home='Touchdown Laval', score='0-7'),
    ]),
)

# =============================================================================
# INDIVIDUAL SPORTS
# =============================================================================

RANKING_HEADERS = ['Rank', 'Athlete', 'University', 'Performance', 'Date', 'Meet']

TNF_60M = (
    '<html><body>'
    + simple_table('class="rankings"', RANKING_HEADERS, [
        ['1', 'A. Runner', 'UBC', '7.45', 'Jan 18', 'Canada West Open'],
        ['2', 'B. Runner', 'Guelph', '7.51', 'Feb 1', 'York Open'],
        ['3', 'C. Runner', 'Atlantis Tech', 'DNF', 'Feb 1', 'York Open'],
    ])
    + '</body></html>'
)

TNF_LONG_JUMP = (
    '<html><body>'
    + simple_table('class="rankings"', RANKING_HEADERS, [
        ['1', 'D. Jumper', 'Laval University', '6.12m', 'Feb 1', 'Quebec Championships'],
        ['T2', 'E. Jumper', 'Western', 'NM', 'Feb 8', 'OUA Championships'],
    ])
    + '</body></html>'
)

TNF_UNIVERSITIES = (
    '<html><body><ul class="university-list">'
    '<li>University of Alberta</li><li>Laval</li><li>Queen’s</li><li>Atlantis Tech</li>'
    '</ul></body></html>'
)

WRESTLING_2019 = (
    '<html><body>'
    '<div class="weight-class"><h3>48 kg</h3>'
    + simple_table('', ['Rank', 'Name', 'University', 'Points'], [
        ['1', 'H. Grappler', 'Brock', '12'],
        ['2', 'I. Grappler', 'Concordia', '9'],
    ])
    + '</div><div class="weight-class"><h3>51 KG</h3>'
    + simple_table('', ['Rank', 'Name', 'University', 'Points'], [
        ['1', 'J. Grappler', 'Guelph', '15'],
    ])
    + '</div></body></html>'
)

SWIMMING_100_FREE = (
    '<html><body>'
    + simple_table('id="rankings"', ['Rank', 'Name', 'Club', 'Time', 'Date', 'Meet'], [
        ['1', 'F. Swimmer', 'UBC', '53.21', 'Nov 15', 'Canada West Invitational'],
        ['2', 'G. Swimmer', 'Toronto', '1:00.05', 'Jan 10', 'OUA Championships'],
    ])
    + '</body></html>'
)

SITE: dict[str, str | int] = {
    f'{BKB_2019}/schedule': BKB_SCHEDULE_2019,
    f'{BKB_2019}/boxscores/20191108_q7ab.xml': BKB_BOX_G1,
    f'{BKB_2019}/boxscores/20191108_q7ab.xml?view=plays': BKB_PLAYS_G1,
    f'{BKB_2019}/boxscores/20200306_x9cd.xml': BKB_BOX_G2,
    f'{BKB_2019}/boxscores/20200306_x9cd.xml?view=plays': BKB_PLAYS_G2,
    f'{BKB_2018}/schedule': BKB_SCHEDULE_2018,
    f'{BKB_2018}/boxscores/20181109_b1rk.xml': BKB_BOX_2018,
    f'{BKB_2018}/boxscores/20181109_b1rk.xml?view=plays': BKB_PLAYS_2018,
    f'{BKB_2021}/schedule': BKB_SCHEDULE_2021,
    f'{FB_2019}/schedule': FB_SCHEDULE_2019,
    f'{FB_2019}/boxscores/20190902_fb01.xml': FB_BOX,
    f'{FB_2019}/boxscores/20190902_fb01.xml?view=drives': FB_DRIVES,
    f'{FB_2019}/boxscores/20190902_fb01.xml?view=plays': FB_PLAYS,
    '/usports/tnf/rankings/2019-2020/women/60m/': TNF_60M,
    '/usports/tnf/rankings/2019-2020/women/long-jump/': TNF_LONG_JUMP,
    '/usports/tnf/universities/': TNF_UNIVERSITIES,
    '/rankings/u-sports/2019-2020/women/': WRESTLING_2019,
    '/Rankings/USports': SWIMMING_100_FREE,
}
