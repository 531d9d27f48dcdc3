from django.core.management.base import BaseCommand
from django.db import transaction

from plugins.django_interface.models import Cid

# ----------------------------------------------------------------------------
# CID-10 odontológicos (catálogo global, compartilhado entre clínicas)
# ----------------------------------------------------------------------------
CID_DATA = [
    # Exames e consultas
    ("Z01", "Exames / Consultas", "Solicitação de exames"),
    ("Z01.2", "Exames / Consultas", "Exame odontológico completo / ação programática"),
    ("Z71.2", "Exames / Consultas", "Mostrar / discutir resultados de exames"),
    ("Z75.2", "Exames / Consultas", "Tratamento concluído"),
    ("Z76", "Exames / Consultas", "Contato com serviços de saúde em outras circunstâncias"),
    ("Z46.3", "Próteses", "Colocação ou ajuste de prótese dentária"),
    ("Z76.1", "Restaurações", "Falha ou fratura de restauração"),
    ("Z76.2", "Procedimentos", "Remoção de sutura"),
    # K02 – cárie
    ("K02.0", "Cárie Dentária", "Cárie limitada ao esmalte"),
    ("K02.1", "Cárie Dentária", "Cárie da dentina"),
    ("K02.2", "Cárie Dentária", "Cárie do cemento"),
    ("K02.3", "Cárie Dentária", "Cárie dentária estacionária"),
    ("K02.4", "Cárie Dentária", "Odontoclasia"),
    ("K02.8", "Cárie Dentária", "Outras cáries dentárias"),
    ("K02.9", "Cárie Dentária", "Cárie dentária não especificada"),
    # K04 – polpa e periápice
    ("K04.0", "Polpa Dentária", "Pulpite"),
    ("K04.1", "Polpa Dentária", "Necrose da polpa"),
    ("K04.2", "Polpa Dentária", "Degeneração da polpa"),
    ("K04.3", "Polpa Dentária", "Formação anormal de tecido duro na polpa"),
    ("K04.4", "Periapical", "Periodontite apical aguda de origem pulpar"),
    ("K04.5", "Periapical", "Periodontite apical crônica"),
    ("K04.6", "Periapical", "Abscesso periapical com fístula"),
    ("K04.7", "Periapical", "Abscesso periapical sem fístula"),
    ("K04.8", "Periapical", "Cisto radicular"),
    ("K04.9", "Periapical", "Doenças da polpa e tecidos periapicais não especificadas"),
    # K05 – periodonto
    ("K05.0", "Periodontal", "Gengivite aguda"),
    ("K05.1", "Periodontal", "Gengivite crônica"),
    ("K05.2", "Periodontal", "Periodontite aguda"),
    ("K05.3", "Periodontal", "Periodontite crônica"),
    ("K05.4", "Periodontal", "Periodontose"),
    ("K05.5", "Periodontal", "Outras doenças periodontais"),
    ("K05.6", "Periodontal", "Doença periodontal não especificada"),
    # K07 – dentofacial
    ("K07.0", "Dentofacial", "Anomalias importantes do tamanho da mandíbula"),
    ("K07.1", "Dentofacial", "Anomalias da relação mandíbula-base do crânio"),
    ("K07.2", "Dentofacial", "Anomalias da relação dentária"),
    ("K07.3", "Dentofacial", "Anomalias da posição dentária"),
    ("K07.4", "Dentofacial", "Maloclusão não especificada"),
    ("K07.5", "Dentofacial", "Anomalias dentofaciais funcionais"),
    # K08 – dentes e estruturas de suporte
    ("K08.0", "Dentes e Estruturas", "Esfoliação dentária por causas sistêmicas"),
    ("K08.1", "Dentes e Estruturas", "Perda de dentes por acidente, extração ou doença periodontal"),
    ("K08.2", "Dentes e Estruturas", "Atrofia do rebordo alveolar"),
    ("K08.3", "Dentes e Estruturas", "Raiz dentária residual"),
    ("K08.8", "Dentes e Estruturas", "Outros transtornos dos dentes e estruturas de suporte"),
    ("K08.9", "Dentes e Estruturas", "Transtorno não especificado dos dentes e estruturas de suporte"),
    # K09 / K12 / K13
    ("K09.0", "Cistos", "Cistos odontogênicos"),
    ("K09.1", "Cistos", "Cistos não odontogênicos da região oral"),
    ("K12.0", "Mucosa Oral", "Estomatite aftosa recorrente"),
    ("K12.1", "Mucosa Oral", "Outras formas de estomatite"),
    ("K12.2", "Mucosa Oral", "Celulite e abscesso da boca"),
    ("K13.0", "Mucosa Oral", "Doenças dos lábios"),
    ("K13.7", "Mucosa Oral", "Outras lesões da mucosa oral"),
    # Traumatismos
    ("S02.5", "Traumatismo Dentário", "Fratura de dente"),
    ("S03.2", "Traumatismo Dentário", "Luxação dentária"),
]


class Command(BaseCommand):
    help = "Seed do catálogo CID-10 odontológico (idempotente)."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("🦷 Iniciando seeding do catálogo CID-10...")

        created_count = 0
        updated_count = 0
        for code, category, description in CID_DATA:
            _, created = Cid.objects.update_or_create(
                code=code,
                defaults={"category": category, "description": description},
            )
            if created:
                created_count += 1
            else:
                updated_count += 1

        self.stdout.write(self.style.SUCCESS(
            f"Seeding concluído! CIDs criados: {created_count}, CIDs atualizados: {updated_count}"
        ))
