import io
import logging
from datetime import date, datetime
from typing import Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.dates as mdates

from weightlog.repositories import EntryRepository
from weightlog.services.weight_service import WeightService

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Generates matplotlib charts of a user's weight history."""

    TIME_RANGE_LABELS = {
        'week': 'Last 7 Days',
        'month': 'Last 30 Days',
        '3months': 'Last 90 Days',
        'all': 'All Time'
    }

    @staticmethod
    def generate_weight_chart(
        user_id: int,
        time_range: str = 'all',
        today: Optional[date] = None,
        repository: Optional[EntryRepository] = None
    ) -> bytes:
        """
        Generate a PNG line chart of the weight series for a time range.

        The dashed segment joins the first and last points of the range; a
        horizontal line marks the goal weight when one is set.

        Returns:
            PNG image as bytes
        """
        try:
            graph = WeightService.get_graph_data(user_id, time_range, today, repository)
            goal = WeightService.get_goal(user_id, repository)['goal']

            data_points = graph['data_points']
            if not data_points:
                return ChartGenerator._generate_error_chart(
                    'No data available for the selected time range'
                )

            date_objs = [
                datetime.combine(date.fromisoformat(dp['date']), datetime.min.time())
                for dp in data_points
            ]
            values = [dp['value'] for dp in data_points]

            fig, ax = plt.subplots(figsize=(12, 7))

            ax.plot(date_objs, values, 'o-', color='#007AFF',
                   label='Weight', linewidth=2, markersize=7,
                   markeredgecolor='white', markeredgewidth=1.5)

            if len(data_points) > 1:
                ax.plot([date_objs[0], date_objs[-1]], [values[0], values[-1]], '--',
                       color='#666666', linewidth=1.5, label='Overall change')

            if goal is not None:
                ax.axhline(goal, color='#66BB6A', linestyle=':', linewidth=2,
                          label=f'Goal ({goal:g} kg)')

            ax.set_xlabel('Date', fontsize=13, fontweight='bold', labelpad=10)
            ax.set_ylabel('Weight (kg)', fontsize=13, fontweight='bold', labelpad=10)

            stats = graph['statistics']
            title = f'Weight - {ChartGenerator.TIME_RANGE_LABELS.get(time_range, time_range)}'
            sign = '+' if stats['net_change'] > 0 else ''
            subtitle = f"(avg {stats['average']} kg | change {sign}{stats['net_change']} kg)"
            ax.set_title(f'{title}\n{subtitle}', fontsize=15, fontweight='bold', pad=20)

            ax.legend(loc='best', fontsize=11, framealpha=0.9)
            ax.grid(True, alpha=0.3, linestyle='--', linewidth=0.7)

            ax.xaxis.set_major_formatter(mdates.DateFormatter('%d.%m'))
            ax.xaxis.set_major_locator(mdates.AutoDateLocator())
            plt.xticks(rotation=45, ha='right')

            plt.tight_layout()

            with io.BytesIO() as buffer:
                plt.savefig(buffer, format='png', dpi=120, bbox_inches='tight')
                buffer.seek(0)
                image_data = buffer.getvalue()

            plt.close(fig)
            return image_data

        except ValueError:
            raise
        except Exception as e:
            logger.exception("Chart generation failed for user %s", user_id)
            return ChartGenerator._generate_error_chart(f'Error: {str(e)}')

    @staticmethod
    def _generate_error_chart(message: str) -> bytes:
        """Generate error message chart."""
        fig, ax = plt.subplots(figsize=(10, 6))
        ax.text(0.5, 0.5, message,
               ha='center', va='center', fontsize=14,
               bbox=dict(boxstyle='round', facecolor='#ffcccc', alpha=0.8))
        ax.axis('off')

        with io.BytesIO() as buffer:
            plt.savefig(buffer, format='png', dpi=100)
            buffer.seek(0)
            image_data = buffer.getvalue()

        plt.close(fig)
        return image_data
