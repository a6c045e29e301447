from flames.models.player import PlayerRole
from flames.models.squad import MAX_SQUAD_SIZE, Squad


class SquadValidator:
    @staticmethod
    def validate(squad: Squad) -> dict:
        """
        Validate a squad before it joins a contest.

        Rules:
        1. Exactly 11 players
        2. Captain and vice-captain chosen from the squad
        3. Captain and vice-captain are different players
        4. Credits spent within budget
        """
        errors = []

        if squad.size != MAX_SQUAD_SIZE:
            errors.append(f"Must select exactly {MAX_SQUAD_SIZE} players, got {squad.size}")

        if squad.captain is None:
            errors.append("Must pick a captain")
        if squad.vice_captain is None:
            errors.append("Must pick a vice-captain")
        if squad.captain_id is not None and squad.captain_id == squad.vice_captain_id:
            errors.append("Captain and vice-captain must be different players")

        if squad.credits_spent > squad.budget:
            errors.append(f"Credits spent {squad.credits_spent} exceed budget {squad.budget}")

        counts = squad.role_counts()
        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "breakdown": {
                "batters": counts[PlayerRole.BATTER],
                "all_rounders": counts[PlayerRole.ALL_ROUNDER],
                "bowlers": counts[PlayerRole.BOWLER],
                "credits_spent": str(squad.credits_spent),
                "credits_remaining": str(squad.credits_remaining),
            },
        }
