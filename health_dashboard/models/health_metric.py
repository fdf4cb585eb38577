from datetime import datetime

from health_dashboard.extensions import db
from health_dashboard.helpers import isoformat


class HealthMetric(db.Model):
    """One set of readings per user per calendar day."""

    __tablename__ = "health_metrics"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)

    heart_rate = db.Column(db.Integer, nullable=True)     # bpm
    steps = db.Column(db.Integer, nullable=True)
    sleep_hours = db.Column(db.Float, nullable=True)
    sugar_level = db.Column(db.Float, nullable=True)      # mg/dL
    bp_systolic = db.Column(db.Float, nullable=True)
    bp_diastolic = db.Column(db.Float, nullable=True)
    weight = db.Column(db.Float, nullable=True)           # kg
    notes = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("user_id", "date", name="uq_health_metrics_user_date"),
    )

    # wire name -> column
    FIELD_MAP = {
        "heartRate": "heart_rate",
        "steps": "steps",
        "sleepHours": "sleep_hours",
        "sugarLevel": "sugar_level",
        "weight": "weight",
        "notes": "notes",
    }

    def apply(self, data):
        """Set the submitted readings; readings left out keep their stored value."""
        for key, column in self.FIELD_MAP.items():
            if key in data:
                setattr(self, column, data[key])
        bp = data.get("bloodPressure")
        if bp:
            if "systolic" in bp:
                self.bp_systolic = bp["systolic"]
            if "diastolic" in bp:
                self.bp_diastolic = bp["diastolic"]

    def readings(self):
        """Readings only, in the camelCase shape the rule helpers and prompts expect."""
        values = {
            "date": isoformat(self.date),
            "heartRate": self.heart_rate,
            "steps": self.steps,
            "sleepHours": self.sleep_hours,
            "sugarLevel": self.sugar_level,
            "weight": self.weight,
        }
        if self.bp_systolic is not None or self.bp_diastolic is not None:
            values["bloodPressure"] = {"systolic": self.bp_systolic, "diastolic": self.bp_diastolic}
        else:
            values["bloodPressure"] = None
        return values

    def to_dict(self):
        values = self.readings()
        values.update({
            "id": self.id,
            "userId": self.user_id,
            "notes": self.notes,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        })
        return values
