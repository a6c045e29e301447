"""
Roster Generator - Builds the JPL catalog: six franchises, their players and
the featured fixture.
"""
from decimal import Decimal

from flames.models.player import Player, PlayerRole
from flames.models.roster import Roster
from flames.models.team import Fixture, Team


FRANCHISE_TEAMS = [
    {"id": "JJ", "name": "Jaipur Jewels", "short_name": "JJ", "color": "#BE185D",
     "motto": "The Gemstone of the West"},
    {"id": "MM", "name": "Mumbai Mavericks", "short_name": "MM", "color": "#1D4ED8",
     "motto": "The Champions of the Harbor"},
    {"id": "AA", "name": "Ahmedabad Aces", "short_name": "AA", "color": "#C2410C",
     "motto": "The Diamond City Strikers"},
    {"id": "DD", "name": "Delhi Dynamos", "short_name": "DD", "color": "#B91C1C",
     "motto": "The Empire's Might"},
    {"id": "KK", "name": "Kolkata Knights", "short_name": "KK", "color": "#7E22CE",
     "motto": "The Royal Bengal Tigers"},
    {"id": "BB", "name": "Bangalore Braves", "short_name": "BB", "color": "#15803D",
     "motto": "The Silicon Stunners"},
]

BAT = PlayerRole.BATTER
AR = PlayerRole.ALL_ROUNDER
BWL = PlayerRole.BOWLER

# id, name, role, credit, season runs, season wickets, strike rate, economy, recent form, bio
# Featured XIs are listed in batting order.
PLAYER_ROWS = [
    # Jaipur Jewels
    ("JJ01", "A. Shah", BAT, "9.5", 420, 0, 142.5, 0.0, (55, 40, 62, 48, 45), "Dynamic opening batsman."),
    ("JJ02", "V. Mehta", BAT, "8.0", 265, 0, 118.3, 0.0, (25, 35, 20, 40, 30), "Experienced middle-order anchor."),
    ("JJ04", "N. Bhandari", BAT, "8.5", 310, 0, 131.0, 0.0, (60, 52, 48, 70, 55), "Wristy number three."),
    ("JJ05", "T. Lodha", BAT, "7.5", 188, 0, 126.4, 0.0, (35, 42, 50, 38, 45), "Left-handed middle-order accumulator."),
    ("JJ06", "Y. Chordia", BAT, "7.0", 142, 0, 151.2, 0.0, (40, 65, 30, 55, 48), "Wicketkeeper who scores quickly."),
    ("JJ03", "J. Kothari", AR, "10.0", 236, 11, 148.9, 7.9, (70, 82, 68, 78, 77), "Premier all-rounder, excellent death bowler."),
    ("JJ07", "R. Dugar", AR, "8.5", 120, 8, 135.0, 8.4, (50, 58, 62, 45, 60), "Seam-bowling all-rounder."),
    ("JJ08", "K. Bafna", BWL, "8.0", 22, 14, 95.0, 7.6, (66, 58, 72, 60, 64), "Hit-the-deck quick."),
    ("JJ09", "S. Surana", BWL, "7.5", 15, 10, 88.0, 7.1, (48, 55, 60, 52, 45), "Left-arm orthodox spinner."),
    ("JJ10", "P. Golchha", BWL, "7.0", 9, 9, 80.0, 8.8, (40, 35, 52, 44, 38), "Death-overs specialist."),
    ("JJ11", "M. Sethia", BWL, "6.5", 4, 6, 66.7, 8.2, (30, 42, 36, 28, 40), "Young leg-spinner."),

    # Mumbai Mavericks
    ("MM01", "R. Oswal", BAT, "9.0", 452, 0, 155.6, 0.0, (65, 58, 70, 50, 57), "Captain, power hitter."),
    ("MM04", "A. Lunia", BAT, "8.5", 298, 0, 128.7, 0.0, (55, 48, 60, 62, 50), "Technically sound opener."),
    ("MM05", "D. Nahar", BAT, "8.0", 233, 0, 137.2, 0.0, (45, 50, 38, 55, 47), "Busy strike rotator."),
    ("MM06", "G. Kankaria", BAT, "7.5", 176, 0, 129.5, 0.0, (30, 44, 52, 40, 39), "Reliable finisher."),
    ("MM07", "H. Bothra", BAT, "7.0", 121, 0, 145.0, 0.0, (35, 28, 46, 50, 41), "Keeper-batter."),
    ("MM03", "M. Gandhi", AR, "10.5", 284, 12, 168.4, 8.1, (78, 85, 72, 80, 85), "Impact player, explosive finisher."),
    ("MM08", "C. Jhabak", AR, "8.0", 98, 9, 124.0, 7.7, (52, 47, 60, 55, 46), "Off-spinning all-rounder."),
    ("MM02", "S. Patni", BWL, "7.5", 18, 16, 90.0, 6.9, (35, 45, 38, 42, 40), "Wily spin bowler."),
    ("MM09", "L. Dhadda", BWL, "8.0", 12, 13, 85.7, 7.8, (62, 70, 58, 66, 64), "Swing bowler with the new ball."),
    ("MM10", "F. Kothari", BWL, "7.0", 7, 10, 70.0, 8.5, (44, 50, 39, 47, 45), "Tall seamer."),
    ("MM11", "I. Chopra", BWL, "6.5", 3, 7, 60.0, 9.1, (30, 36, 41, 33, 35), "Raw pace, still learning control."),

    # Other franchises (for Smart Suggestions)
    ("AA01", "D. Jain", BAT, "8.5", 361, 0, 133.1, 0.0, (68, 74, 66, 72, 70), "Solid top-order bat."),
    ("AA02", "E. Parikh", AR, "9.0", 187, 10, 140.2, 7.5, (58, 64, 70, 61, 57), "Batting all-rounder who bowls tidy medium pace."),
    ("AA03", "O. Desai", BWL, "7.5", 11, 12, 78.6, 7.3, (50, 56, 61, 49, 54), "Accurate off-spinner."),

    ("BB01", "K. Soni", BWL, "8.2", 14, 18, 82.4, 7.2, (60, 70, 64, 66, 65), "Fast bowler with swing."),
    ("BB02", "U. Vora", BAT, "8.0", 276, 0, 138.6, 0.0, (48, 52, 60, 45, 55), "Aggressive left-handed opener."),
    ("BB03", "W. Ajmera", AR, "8.5", 150, 7, 146.3, 8.6, (44, 51, 57, 62, 46), "Hard-hitting lower-order all-rounder."),

    ("DD01", "P. Sanghvi", AR, "9.8", 245, 11, 139.5, 7.4, (80, 75, 82, 74, 79), "Dependable all-rounder."),
    ("DD02", "B. Zaveri", BAT, "8.0", 229, 0, 127.0, 0.0, (52, 49, 58, 44, 57), "Composed middle-order batter."),
    ("DD03", "Q. Modi", BWL, "7.0", 6, 9, 75.0, 8.0, (38, 46, 41, 50, 45), "Left-arm seamer."),

    ("KK01", "H. Parekh", BAT, "7.0", 96, 0, 112.9, 0.0, (15, 25, 20, 18, 22), "Young talent, still developing."),
    ("KK02", "X. Dalal", BWL, "7.5", 10, 11, 83.3, 7.0, (55, 48, 62, 58, 52), "Mystery spinner."),
    ("KK03", "Z. Khatri", AR, "8.0", 133, 6, 132.0, 8.3, (42, 50, 47, 55, 46), "Utility all-rounder."),
]

FEATURED_FIXTURES = [
    {
        "id": "JPL09_M12",
        "home_team_id": "JJ",
        "away_team_id": "MM",
        "venue": "Motera Stadium, Ahmedabad",
        "toss": "Mumbai Mavericks won the toss and elected to bowl.",
        "batting_first_team_id": "JJ",
    },
]


class RosterGenerator:
    """Builds catalog objects from the static JPL data above"""

    @staticmethod
    def generate_teams() -> list[Team]:
        return [Team(**data) for data in FRANCHISE_TEAMS]

    @staticmethod
    def generate_players() -> list[Player]:
        players = []
        for pid, name, role, credit, runs, wickets, sr, econ, form, bio in PLAYER_ROWS:
            players.append(Player(
                id=pid,
                team_id=pid[:2],
                name=name,
                role=role,
                credit=Decimal(credit),
                season_runs=runs,
                season_wickets=wickets,
                strike_rate=sr,
                economy=econ,
                recent_form=form,
                bio=bio,
            ))
        return players

    @staticmethod
    def generate_fixtures() -> list[Fixture]:
        return [Fixture(**data) for data in FEATURED_FIXTURES]

    @classmethod
    def build_roster(cls) -> Roster:
        return Roster(cls.generate_teams(), cls.generate_players(), cls.generate_fixtures())


_default_roster = None


def get_roster() -> Roster:
    """Process-wide default catalog, built on first use"""
    global _default_roster
    if _default_roster is None:
        _default_roster = RosterGenerator.build_roster()
    return _default_roster
