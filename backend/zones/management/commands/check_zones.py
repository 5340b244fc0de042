"""
Management command для проверки конфигурации зон доставки
"""
from django.core.management.base import BaseCommand

from geo.geometry import centroid
from utils.exceptions import InvalidGeometryError
from zones.services import ZoneCatalog


class Command(BaseCommand):
    help = 'Проверяет полигоны, центроиды и тарифы зон доставки'

    def add_arguments(self, parser):
        parser.add_argument(
            '--active-only',
            action='store_true',
            help='Проверять только активные зоны',
        )

    def handle(self, *args, **options):
        zones = ZoneCatalog.list_zones(True if options.get('active_only') else None)

        self.stdout.write('Проверка зон доставки...')
        self.stdout.write('=' * 60)

        problems = 0
        for zone in zones:
            issues = []

            try:
                geometry = zone.geometry
            except InvalidGeometryError as e:
                issues.append(f'некорректный полигон: {e.detail}')
                geometry = None

            if geometry is not None and centroid(geometry) is None:
                issues.append('вырожденная геометрия (нулевая площадь)')
            if zone.centroid is None:
                issues.append('нет центроида, расстояние будет считаться от склада')

            tariffs = list(zone.tariffs.all())
            if not tariffs:
                issues.append('нет тарифов')
            elif tariffs[-1].distance_max_km is not None:
                issues.append(
                    f'последний тариф ограничен {tariffs[-1].distance_max_km} км, '
                    'дальние точки получат его как запасной'
                )

            status = 'активна' if zone.active else 'отключена'
            if issues:
                problems += 1
                self.stdout.write(self.style.WARNING(f'{zone.id} {zone.name} ({status}):'))
                for issue in issues:
                    self.stdout.write(f'  - {issue}')
            else:
                self.stdout.write(self.style.SUCCESS(
                    f'{zone.id} {zone.name} ({status}): OK, тарифов {len(tariffs)}'
                ))

        self.stdout.write('=' * 60)
        if problems:
            self.stdout.write(self.style.ERROR(f'Зон с проблемами: {problems}'))
        else:
            self.stdout.write(self.style.SUCCESS('Все зоны настроены корректно'))
